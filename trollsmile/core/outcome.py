"""
Dispatch outcomes: Handled, NotFound or Failed.

A ``Handled`` result is already rendered: a non-empty string or None. A
``Failed`` outcome describes its error by ``str(error)``; errors whose string
form is empty are described by their class name instead.
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
from typing import Optional

from .context import Identity


class DispatchOutcome:
    """Base class of the outcome variants."""

    @property
    def is_success(self) -> bool:
        return not isinstance(self, Failed)


@dataclass(frozen=True)
class Handled(DispatchOutcome):
    """The handler completed; ``result`` is None when it produced nothing."""

    command: str
    result: Optional[str] = None


@dataclass(frozen=True)
class NotFound(DispatchOutcome):
    """No registered command or alias matched."""

    name: Optional[str] = None


@dataclass(frozen=True)
class Failed(DispatchOutcome):
    """The handler raised."""

    command: str
    error: Exception
    identity: Identity

    @property
    def description(self) -> str:
        """String form of the error, or its class name when the message is empty."""
        return str(self.error) or type(self.error).__name__
