"""siteprov: provision nginx with a placeholder site and TLS on one host."""

__version__ = "0.1.0"
