from .event_bus import EventBus
from .listener import Listener, ListenerOptions

__all__ = ["EventBus", "Listener", "ListenerOptions"]
