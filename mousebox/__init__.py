"""Game building blocks (logging, geometry, messages, trees, entities) and CHSE archives."""

__version__ = "0.0.1"
__all__ = ["archive", "cli", "entity", "geometry", "log", "message", "tree"]