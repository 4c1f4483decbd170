"""
Command dispatcher.

Per input line: match -> tokenize -> dispatch -> report. Handler faults are
contained here; they become ``Failed`` outcomes and never reach the caller.
"""

"""
Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import inspect
import logging
from typing import Any, List, Optional

from .context import BotContext, Message
from .matcher import parse_line
from .outcome import DispatchOutcome, Failed, Handled, NotFound
from .reporter import OutcomeReporter

logger = logging.getLogger("trollsmile.dispatch")


def render_result(result: Any) -> Optional[str]:
    """Text to send for a handler result; None when there is nothing to send."""
    if not result:
        return None
    text = result if isinstance(result, str) else str(result)
    return text or None


class Dispatcher:
    """Routes input lines to registered command handlers."""

    def __init__(self, context: BotContext, reporter: Optional[OutcomeReporter] = None):
        """
        Initialize the dispatcher.

        Args:
            context: Context handed to every handler
            reporter: Outcome reporter, a default one when omitted
        """
        self.context = context
        self.registry = context.registry
        self.reporter = reporter or OutcomeReporter()

    async def dispatch(self, name: str, message: Message, args: List[str]) -> DispatchOutcome:
        """
        Resolve a matched name and run its handler.

        Args:
            name: Matched canonical name or alias
            message: Message being handled
            args: Tokenized arguments

        Returns:
            Handled, NotFound or Failed
        """
        descriptor = self.registry.resolve(name)
        if descriptor is None:
            return NotFound(name)

        logger.debug(f"Dispatching '{descriptor.name}' (invoked as '{name}') with args {args}")
        try:
            result = descriptor.handler(self.context, message, args)
            if inspect.isawaitable(result):
                result = await result
            # str() of a result runs command code too
            text = render_result(result)
        except Exception as e:
            logger.error(
                f"Command '{descriptor.name}' failed: {e}",
                exc_info=True,
                extra={"command": descriptor.name, "command_args": args},
            )
            return Failed(command=descriptor.name, error=e, identity=self.context.identity)

        return Handled(command=descriptor.name, result=text)

    async def handle(self, message: Message) -> DispatchOutcome:
        """Run the full pipeline for one message and report the outcome."""
        match = parse_line(message.content, self.registry.names(), self.context.prefix)
        if match is None:
            return NotFound()

        outcome = await self.dispatch(match.name, message, match.args)
        await self.reporter.report(outcome, message)
        return outcome
