"""
Exception hierarchy for trollsmile.

Startup errors (discovery, registration, configuration) are fatal and abort the
process. Faults raised by command handlers never appear here: the dispatcher
turns them into a ``Failed`` outcome instead.
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

from pathlib import Path
from typing import Optional, Union


class TrollsmileError(Exception):
    """Base class for all trollsmile errors."""


class ConfigurationError(TrollsmileError):
    """Raised when a configuration file cannot be read or validated."""


class DiscoveryError(TrollsmileError):
    """Raised when a command module cannot be loaded."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"{message} ({self.path})"
        super().__init__(message)


class RegistryError(TrollsmileError):
    """Base class for registration collisions."""


class DuplicateNameError(RegistryError):
    """A command name is already registered as a name or an alias."""

    def __init__(self, name: str, existing: str):
        self.name = name
        self.existing = existing
        super().__init__(f"Command name '{name}' is already registered by '{existing}'")


class DuplicateAliasError(RegistryError):
    """An alias collides with an existing alias or canonical name."""

    def __init__(self, alias: str, command: str, existing: str):
        self.alias = alias
        self.command = command
        self.existing = existing
        super().__init__(
            f"Alias '{alias}' of command '{command}' collides with '{existing}'"
        )
