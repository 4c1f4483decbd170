"""UI components for the trollsmile shell."""

from .banner import show_banner
from .formatter import ShellFormatter
from .prompt import ConsolePrompt

__all__ = [
    "show_banner",
    "ShellFormatter",
    "ConsolePrompt",
]
