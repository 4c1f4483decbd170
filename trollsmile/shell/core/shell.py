"""
Main trollsmile shell implementation.

Loads the commands once, then reads lines from the prompt and dispatches
them one at a time: the next line is read only after the current one has been
matched, dispatched and reported.
"""

import asyncio
import logging
from typing import Any, Optional

from ... import __version__
from ...config.bot_config import BotConfig
from ...core.context import BotContext, Identity, Message
from ...core.dispatcher import Dispatcher
from ...core.outcome import DispatchOutcome
from ...core.registry import CommandRegistry
from ...core.reporter import ErrorReport
from ...loader import load_registry
from ..ui import ConsolePrompt, ShellFormatter, show_banner

logger = logging.getLogger("trollsmile.shell")


class ConsoleChannel:
    """Output channel rendering payloads through the shell formatter."""

    def __init__(self, formatter: ShellFormatter):
        self.formatter = formatter

    def send(self, payload: Any):
        if isinstance(payload, ErrorReport):
            self.formatter.print_error_report(payload)
        else:
            self.formatter.print_result(str(payload))


class TrollsmileShell:
    """Interactive command shell."""

    def __init__(
        self,
        config: Optional[BotConfig] = None,
        prompt: Optional[ConsolePrompt] = None,
        formatter: Optional[ShellFormatter] = None,
    ):
        """
        Initialize the shell.

        Args:
            config: Bot configuration, defaults when omitted
            prompt: Input source, a console prompt when omitted
            formatter: Output formatter
        """
        self.config = config or BotConfig()
        self.formatter = formatter or ShellFormatter(use_rich=self.config.shell.use_rich)
        self.prompt = prompt or ConsolePrompt(
            self.config.shell.prompt, self.config.shell.history_file
        )
        self.channel = ConsoleChannel(self.formatter)

        self.context: Optional[BotContext] = None
        self.dispatcher: Optional[Dispatcher] = None
        self.lines_processed = 0

    @property
    def registry(self) -> Optional[CommandRegistry]:
        return self.context.registry if self.context else None

    async def load_commands(self) -> CommandRegistry:
        """
        Discover and register all commands.

        Raises:
            DiscoveryError: A command module failed to load
            RegistryError: Two commands collide under the ``error`` policy
        """
        discovery = self.config.discovery
        registry = await load_registry(
            discovery.commands_dir, discovery.extensions, discovery.duplicate_policy
        )

        self.context = BotContext(
            registry=registry,
            identity=Identity(
                username=self.config.identity.username,
                avatar_url=self.config.identity.avatar_url,
            ),
            prefix=self.config.prefix,
            output=self.channel,
            config=self.config,
        )
        self.dispatcher = Dispatcher(self.context)

        logger.info(
            f"Registered {len(registry)} commands",
            extra={"commands": [d.name for d in registry.list_commands()]},
        )
        return registry

    def accepts(self, message: Message) -> bool:
        """Filter hook applied before matching; every line is accepted by default."""
        return True

    async def process_line(self, line: str) -> Optional[DispatchOutcome]:
        """Match, dispatch and report a single line."""
        if self.dispatcher is None:
            raise RuntimeError("Commands are not loaded; call load_commands() first")

        message = self.context.message(line)
        if not self.accepts(message):
            return None

        outcome = await self.dispatcher.handle(message)
        self.lines_processed += 1
        return outcome

    async def run_loop(self) -> None:
        """Read and process lines until input ends."""
        while True:
            line = await self.prompt.read_line()
            if line is None:
                logger.debug("Input ended")
                break
            await self.process_line(line)

    async def start(self) -> None:
        """Show the banner, load commands and run the prompt loop."""
        show_banner(
            self.config.shell.logo_file,
            version=__version__,
            use_rich=self.formatter.use_rich,
            console=self.formatter.console,
        )
        await self.load_commands()
        await self.run_loop()

    def run(self) -> None:
        """Run the interactive shell."""
        asyncio.run(self.start())
