"""kexec-switch: pick an installed kernel from a terminal menu and switch into it with kexec."""

__version__ = "0.1.0"
