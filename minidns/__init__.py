"""A small plain-text name resolver: a lookup server, a caching proxy and an interactive client."""

__version__ = "0.1.0"
__all__ = ["client", "proxy", "server"]