"""Loader, memory, terminals and error reports for a tiny 3BC virtual machine."""

__version__ = "0.1.0"