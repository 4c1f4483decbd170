"""
Outcome reporting.

Turns a dispatch outcome into at most one ``channel.send`` call: the result
text for a handled command, a structured ``ErrorReport`` for a failed one and
nothing otherwise.
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
from dataclasses import dataclass
from typing import Any, Optional

from dataclasses_json import dataclass_json

from .context import Identity, Message
from .outcome import DispatchOutcome, Failed, Handled

FAILURE_COLOR = "RED"


@dataclass_json
@dataclass(frozen=True)
class ErrorReport:
    """Structured error payload; the transport decides how to render it."""

    author_name: str
    author_icon: str
    title: str
    color: str = FAILURE_COLOR

    @classmethod
    def from_failure(cls, error_text: str, identity: Identity) -> "ErrorReport":
        return cls(
            author_name=f"{identity.username} ran into an error while running your command!",
            author_icon=identity.avatar_url,
            title=error_text,
        )


class OutcomeReporter:
    """Sends outcomes back through the message channel."""

    async def report(self, outcome: DispatchOutcome, message: Message) -> Optional[Any]:
        """
        Report an outcome.

        Args:
            outcome: Outcome of a dispatch
            message: The message that was dispatched

        Returns:
            The payload that was sent, or None if nothing was sent
        """
        payload = self.payload_for(outcome)
        if payload is None:
            return None

        sent = message.channel.send(payload)
        if inspect.isawaitable(sent):
            await sent
        return payload

    @staticmethod
    def payload_for(outcome: DispatchOutcome) -> Optional[Any]:
        """Payload to send for an outcome, or None."""
        if isinstance(outcome, Handled):
            return outcome.result or None

        if isinstance(outcome, Failed):
            return ErrorReport.from_failure(outcome.description, outcome.identity)

        return None
