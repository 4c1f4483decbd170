"""
Console prompt for the trollsmile shell.

Reads one line at a time from standard input without blocking the event loop.
Each read runs on a daemon thread, so an interrupted shell can exit while a
read is still waiting for input.
"""

import asyncio
import atexit
import logging
import readline
import threading
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger("trollsmile.shell")


class ConsolePrompt:
    """Line-oriented prompt over standard input."""

    def __init__(
        self,
        prompt: str = "> ",
        history_file: Optional[str] = None,
        reader: Callable[[str], str] = input,
    ):
        """
        Initialize prompt.

        Args:
            prompt: Prompt string shown before each line
            history_file: Optional readline history file
            reader: Blocking line reader, ``input`` by default
        """
        self.prompt = prompt
        self.reader = reader
        if history_file:
            self._setup_history(Path(history_file).expanduser())

    def _setup_history(self, history_file: Path):
        """Setup command history."""
        try:
            if history_file.exists():
                readline.read_history_file(str(history_file))

            readline.set_history_length(1000)
            atexit.register(readline.write_history_file, str(history_file))
        except OSError as e:
            logger.warning(f"Command history unavailable: {e}")

    def _read(self) -> Optional[str]:
        try:
            return self.reader(self.prompt)
        except EOFError:
            return None

    async def read_line(self) -> Optional[str]:
        """Next input line, or None once input has ended."""
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def resolve(setter, value):
            if not future.done():
                setter(value)

        def deliver(setter, value):
            try:
                loop.call_soon_threadsafe(resolve, setter, value)
            except RuntimeError:
                logger.debug("Input arrived after the event loop closed")

        def read():
            try:
                line = self._read()
            except Exception as e:
                deliver(future.set_exception, e)
            else:
                deliver(future.set_result, line)

        threading.Thread(target=read, name="trollsmile-prompt", daemon=True).start()
        return await future
