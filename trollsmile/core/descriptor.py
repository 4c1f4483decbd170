"""
Command descriptors.

A descriptor is the registered definition of a command: the handler, its
aliases and the help text shown to the operator.
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

from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple, Union

from typing_extensions import Protocol, runtime_checkable

from .errors import DiscoveryError

DEFAULT_HELP = "A command without a description"

# (context, message, args) -> result, None, or an awaitable of either
Handler = Callable[[Any, Any, List[str]], Union[Any, Awaitable[Any]]]


@runtime_checkable
class CommandModule(Protocol):
    """Shape of a loadable command module: ``run`` plus optional metadata."""

    run: Handler


@dataclass(frozen=True)
class CommandDescriptor:
    """Represents a loaded command."""

    name: str
    handler: Handler
    aliases: Tuple[str, ...] = ()
    help: str = DEFAULT_HELP
    source: Optional[Path] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Command name must not be empty")
        if not callable(self.handler):
            raise TypeError(f"Handler of command '{self.name}' is not callable")
        # Lists are accepted for convenience but stored as a tuple
        object.__setattr__(self, "aliases", tuple(self.aliases or ()))

    @property
    def names(self) -> Tuple[str, ...]:
        """Canonical name followed by aliases."""
        return (self.name,) + self.aliases

    @classmethod
    def from_module(
        cls, name: str, module: ModuleType, source: Optional[Path] = None
    ) -> "CommandDescriptor":
        """
        Build a descriptor from a command module.

        Args:
            name: Canonical command name (the module file's base name)
            module: Loaded module exposing ``run`` and optionally ``aliases``/``help``
            source: Path the module was loaded from

        Raises:
            DiscoveryError: If the module does not follow the command module contract
        """
        if not isinstance(module, CommandModule):
            raise DiscoveryError(f"Command module '{name}' does not define run()", source)
        if not callable(module.run):
            raise DiscoveryError(f"run in command module '{name}' is not callable", source)

        aliases = _validate_aliases(name, getattr(module, "aliases", None), source)

        help_text = getattr(module, "help", None)
        if help_text is None:
            help_text = DEFAULT_HELP
        elif not isinstance(help_text, str):
            raise DiscoveryError(f"help in command module '{name}' must be a string", source)

        return cls(
            name=name,
            handler=module.run,
            aliases=aliases,
            help=help_text,
            source=source,
        )


def _validate_aliases(
    name: str, aliases: Optional[Sequence[Any]], source: Optional[Path]
) -> Tuple[str, ...]:
    if aliases is None:
        return ()
    if isinstance(aliases, str) or not isinstance(aliases, (list, tuple)):
        raise DiscoveryError(f"aliases in command module '{name}' must be a list of strings", source)
    for alias in aliases:
        if not isinstance(alias, str) or not alias:
            raise DiscoveryError(
                f"aliases in command module '{name}' must be non-empty strings", source
            )
    return tuple(aliases)
