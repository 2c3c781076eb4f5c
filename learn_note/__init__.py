"""Learn Note: folders, topics and resources for self-directed study."""

__version__ = "0.1.0"
