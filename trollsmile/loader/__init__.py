"""Command discovery: loads command modules from a directory tree."""

from .discovery import (
    build_registry,
    command_name,
    discover_commands,
    iter_command_files,
    load_descriptor,
    load_registry,
)

__all__ = [
    "build_registry",
    "command_name",
    "discover_commands",
    "iter_command_files",
    "load_descriptor",
    "load_registry",
]
