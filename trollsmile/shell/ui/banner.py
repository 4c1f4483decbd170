"""
Banner display for the trollsmile shell.

Shows the operator's logo file when there is one, the built-in banner
otherwise.
"""

from pathlib import Path
from typing import Optional, Union

from rich.console import Console

DEFAULT_BANNER = r"""
 _             _ _               _ _
| |_ _ __ ___ | | |___ _ __ ___ (_) | ___
| __| '__/ _ \| | / __| '_ ` _ \| | |/ _ \
| |_| | | (_) | | \__ \ | | | | | | |  __/
 \__|_|  \___/|_|_|___/_| |_| |_|_|_|\___|
"""


def load_logo(logo_file: Optional[Union[str, Path]]) -> str:
    """Logo text from ``logo_file`` (trimmed), or the built-in banner."""
    if logo_file:
        path = Path(logo_file)
        if path.is_file():
            return path.read_text(encoding="utf-8").strip()
    return DEFAULT_BANNER.strip("\n")


def show_banner(
    logo_file: Optional[Union[str, Path]] = None,
    version: str = "1.0.0",
    use_rich: bool = True,
    console: Optional[Console] = None,
):
    """
    Display the shell banner.

    Args:
        logo_file: Optional logo file printed instead of the built-in banner
        version: trollsmile version
        use_rich: Whether to use rich formatting
        console: Console to print to
    """
    logo = load_logo(logo_file)

    if use_rich:
        console = console or Console()
        console.print(logo, style="cyan bold", markup=False, highlight=False)
        console.print(f":: trollsmile :: (v{version})", style="dim", markup=False)
    else:
        print(logo)
        print(f":: trollsmile :: (v{version})")
