"""
Dispatch context and message types.

``BotContext`` is passed explicitly to every handler call. It carries the
registry, the identity the bot acts as, the command prefix and the default
output channel.
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

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from typing_extensions import Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..config.bot_config import BotConfig
    from .registry import CommandRegistry


@runtime_checkable
class Channel(Protocol):
    """Output capability. Payload is a string or an ``ErrorReport``."""

    def send(self, payload: Any) -> Any:
        ...


@dataclass(frozen=True)
class Identity:
    """Display identity of the acting bot."""

    username: str = "trollsmile cli"
    avatar_url: str = ""


@dataclass
class Message:
    """One input line and the channel replies go to."""

    content: str
    channel: Channel


@dataclass
class BotContext:
    """Everything a handler may need besides the message itself."""

    registry: "CommandRegistry"
    identity: Identity = field(default_factory=Identity)
    prefix: str = ""
    output: Optional[Channel] = None
    config: Optional["BotConfig"] = None

    def message(self, content: str, channel: Optional[Channel] = None) -> Message:
        """Build a message bound to ``channel`` or the default output."""
        channel = channel or self.output
        if channel is None:
            raise ValueError("No channel given and the context has no default output")
        return Message(content=content, channel=channel)
