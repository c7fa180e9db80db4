"""Browse users and todos from a JSONPlaceholder-style REST API."""

__version__ = "0.1.0"
