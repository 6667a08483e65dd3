"""User accounts, server and client configuration, and an offline secrets cache for a personal secrets keeper."""

__version__ = "0.1.0"