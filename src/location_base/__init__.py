"""My Location BASE: capture, store and list device coordinates."""

__version__ = "1.0.0"
