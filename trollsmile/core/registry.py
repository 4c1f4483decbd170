"""
Command registry for trollsmile.

Maps canonical command names to descriptors and aliases to canonical names.
The registry is filled once at startup and only read afterwards.
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

import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .descriptor import CommandDescriptor
from .errors import DuplicateAliasError, DuplicateNameError

logger = logging.getLogger("trollsmile.registry")


class DuplicatePolicy(str, Enum):
    """What to do when a name or alias is registered twice."""

    ERROR = "error"
    OVERRIDE = "override"


class CommandRegistry:
    """Registry for commands."""

    def __init__(self, policy: DuplicatePolicy = DuplicatePolicy.ERROR):
        """
        Initialize the command registry.

        Args:
            policy: Collision policy for names and aliases
        """
        self.policy = DuplicatePolicy(policy)
        self._commands: Dict[str, CommandDescriptor] = {}
        self._aliases: Dict[str, str] = {}  # alias -> command_name

    def register(self, descriptor: CommandDescriptor) -> None:
        """
        Register a command and its aliases.

        Args:
            descriptor: Command to register

        Raises:
            DuplicateNameError: The name is taken and the policy is ``error``
            DuplicateAliasError: An alias is taken and the policy is ``error``,
                or an alias would shadow a canonical name
        """
        name = descriptor.name
        override = self.policy is DuplicatePolicy.OVERRIDE

        # Validate everything first so a failed registration leaves no trace
        if not override:
            if name in self._commands:
                existing = self._commands[name]
                raise DuplicateNameError(name, str(existing.source or existing.name))
            if name in self._aliases:
                raise DuplicateNameError(name, f"alias of {self._aliases[name]}")

        seen = set()
        for alias in descriptor.aliases:
            if alias == name or alias in seen:
                raise DuplicateAliasError(alias, name, name)
            seen.add(alias)
            if alias in self._commands and alias != name:
                raise DuplicateAliasError(alias, name, alias)
            if not override and alias in self._aliases:
                raise DuplicateAliasError(alias, name, f"alias of {self._aliases[alias]}")

        if name in self._commands:
            logger.warning(f"Overriding command '{name}'")
            self._drop_aliases_of(name)
        if name in self._aliases:
            logger.warning(f"Command '{name}' replaces alias of '{self._aliases[name]}'")
            del self._aliases[name]

        self._commands[name] = descriptor
        for alias in descriptor.aliases:
            if alias in self._aliases:
                logger.warning(f"Alias '{alias}' moves from '{self._aliases[alias]}' to '{name}'")
            self._aliases[alias] = name

        logger.debug(f"Registered command: {name} with aliases {list(descriptor.aliases)}")

    def register_all(self, descriptors: Iterable[CommandDescriptor]) -> None:
        """Register several commands in order."""
        for descriptor in descriptors:
            self.register(descriptor)

    def _drop_aliases_of(self, name: str) -> None:
        for alias in [a for a, target in self._aliases.items() if target == name]:
            del self._aliases[alias]

    def resolve(self, name: str) -> Optional[CommandDescriptor]:
        """Get a command by canonical name, falling back to aliases."""
        descriptor = self._commands.get(name)
        if descriptor is not None:
            return descriptor

        canonical = self._aliases.get(name)
        if canonical is None:
            return None
        return self._commands.get(canonical)

    def names(self) -> List[str]:
        """All invocable names: canonical names first, then aliases."""
        return list(self._commands) + list(self._aliases)

    @property
    def aliases(self) -> Dict[str, str]:
        """Copy of the alias -> canonical name mapping."""
        return dict(self._aliases)

    def list_commands(self) -> List[CommandDescriptor]:
        """List all commands sorted by name."""
        return sorted(self._commands.values(), key=lambda d: d.name)

    def search_commands(self, query: str) -> List[CommandDescriptor]:
        """
        Search for commands by name, alias or help text.

        Args:
            query: Search query (case-insensitive)

        Returns:
            List of matching commands
        """
        query = query.lower()
        results = []

        for cmd in self.list_commands():
            if (query in cmd.name.lower() or
                query in cmd.help.lower() or
                any(query in alias.lower() for alias in cmd.aliases)):
                results.append(cmd)

        return results

    def __contains__(self, name: object) -> bool:
        return name in self._commands or name in self._aliases

    def __len__(self) -> int:
        return len(self._commands)
