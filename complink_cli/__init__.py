"""complink: find component instances that are not linked to a shared library."""

__version__ = "1.0.0"
