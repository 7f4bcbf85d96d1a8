from .server import mcp

__all__ = ["mcp"]
