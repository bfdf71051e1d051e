"""Core runtime components."""
