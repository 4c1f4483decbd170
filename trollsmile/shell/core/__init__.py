"""Core shell components."""

from .shell import ConsoleChannel, TrollsmileShell

__all__ = ["ConsoleChannel", "TrollsmileShell"]
