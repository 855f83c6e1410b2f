"""buildsvc - In-memory CRUD service for build records.

This package provides a thread-safe keyed store of builds, an HTTP
client for the same interface, and the CLI that serves the web API.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
