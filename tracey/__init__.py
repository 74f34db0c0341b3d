"""Tool registry, built-in file and shell tools, and terminal session state."""

__version__ = "0.1.0"