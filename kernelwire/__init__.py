"""Configuration, logging, process control blocks, wire messages and socket helpers for an operating-system simulator."""

__version__ = "0.1.0"
__all__ = [
    "buffer",
    "configs",
    "greeting",
    "lists",
    "logs",
    "messages",
    "packets",
    "process",
    "sockets",
]