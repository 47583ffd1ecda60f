"""Client for an instant messaging REST administration API: accounts and groups."""

__version__ = "0.1.0"