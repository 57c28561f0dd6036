"""EventHub backend: auth with guest accounts and event management."""

__version__ = "1.0.0"
