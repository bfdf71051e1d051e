from .shared_store import SharedStore

__all__ = ["SharedStore"]
