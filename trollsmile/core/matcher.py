"""
Line matching and argument tokenizing.

A line invokes a name when it equals ``prefix + name`` exactly, or starts with
``prefix + name`` followed by one space. When several names qualify (one name
is a prefix of another) the longest one wins, so ``"echo2 x"`` goes to
``echo2`` even if ``echo`` is registered too.
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
from typing import Iterable, List, Optional

SEPARATOR = " "


@dataclass(frozen=True)
class LineMatch:
    """A matched invocation: the name used and the parsed arguments."""

    name: str
    args: List[str] = field(default_factory=list)


def match_line(line: str, known_names: Iterable[str], prefix: str = "") -> Optional[str]:
    """
    Find the name or alias a line invokes.

    Args:
        line: Raw input line
        known_names: Canonical names and aliases
        prefix: Text that must precede the name (may be empty)

    Returns:
        The longest matching name, or None when nothing matches
    """
    if not line.startswith(prefix):
        return None

    best: Optional[str] = None
    for name in known_names:
        invoked = prefix + name
        if line == invoked or line.startswith(invoked + SEPARATOR):
            if best is None or len(name) > len(best):
                best = name
    return best


def tokenize(line: str, matched_length: int) -> List[str]:
    """
    Split the remainder of a matched line into arguments.

    Args:
        line: The matched line
        matched_length: Length of the matched ``prefix + name``

    Returns:
        Tokens split on single spaces. A bare invocation yields ``[]``;
        consecutive spaces yield empty tokens, which are kept.
    """
    if len(line) <= matched_length:
        return []
    remainder = line[matched_length + len(SEPARATOR):]
    return remainder.split(SEPARATOR)


def parse_line(line: str, known_names: Iterable[str], prefix: str = "") -> Optional[LineMatch]:
    """Match a line and tokenize its arguments in one step."""
    name = match_line(line, known_names, prefix)
    if name is None:
        return None
    return LineMatch(name=name, args=tokenize(line, len(prefix) + len(name)))
