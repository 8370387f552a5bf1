"""dockmenu - a lightweight controller for a container runtime."""

__version__ = "0.1.0"
