#!/usr/bin/env python3
"""
Unit tests for line matching and argument tokenizing.
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

import pytest

from trollsmile.core.matcher import match_line, parse_line, tokenize

NAMES = ["echo", "help", "e", "h", "?"]


class TestMatchLine:
    """Test match_line."""

    def test_bare_invocation(self):
        """A line equal to a name matches it."""
        assert match_line("echo", NAMES) == "echo"
        assert match_line("?", NAMES) == "?"

    def test_invocation_with_arguments(self):
        """A name followed by a space and arguments matches."""
        assert match_line("echo hello world", NAMES) == "echo"
        assert match_line("e hi", NAMES) == "e"

    def test_no_match(self):
        """Unknown lines do not match."""
        assert match_line("unknown", NAMES) is None
        assert match_line("", NAMES) is None

    def test_name_must_be_followed_by_space(self):
        """A name glued to other text is not an invocation."""
        assert match_line("echoes", ["echo"]) is None
        assert match_line("echo\thi", ["echo"]) is None

    def test_case_sensitive(self):
        """Matching is case-sensitive."""
        assert match_line("ECHO hi", NAMES) is None

    def test_leading_space_is_not_stripped(self):
        """Lines are matched as typed."""
        assert match_line(" echo hi", NAMES) is None

    @pytest.mark.parametrize(
        "names",
        [["e", "echo", "echo2"], ["echo2", "echo", "e"], ["echo", "echo2", "e"]],
    )
    def test_longest_match_wins(self, names):
        """The longest matching name wins regardless of enumeration order."""
        assert match_line("echo2 x", names) == "echo2"
        assert match_line("echo x", names) == "echo"
        assert match_line("e x", names) == "e"

    def test_multi_word_names(self):
        """Names containing spaces prefer the longer match."""
        names = ["git", "git log"]

        assert match_line("git log -n 3", names) == "git log"
        assert match_line("git status", names) == "git"

    def test_prefix(self):
        """With a prefix, the prefix must precede the name."""
        assert match_line("!echo hi", NAMES, prefix="!") == "echo"
        assert match_line("!echo", NAMES, prefix="!") == "echo"
        assert match_line("echo hi", NAMES, prefix="!") is None
        assert match_line("!", NAMES, prefix="!") is None


class TestTokenize:
    """Test tokenize."""

    def test_arguments(self):
        """Arguments are split on single spaces."""
        assert tokenize("cmd a b c", 3) == ["a", "b", "c"]

    def test_bare(self):
        """A bare invocation has no arguments."""
        assert tokenize("cmd", 3) == []

    def test_consecutive_spaces_produce_empty_tokens(self):
        """No whitespace collapsing is performed."""
        assert tokenize("cmd a  b", 3) == ["a", "", "b"]

    def test_trailing_space(self):
        """A trailing space yields a single empty token."""
        assert tokenize("cmd ", 3) == [""]

    def test_no_quoting(self):
        """Quotes are ordinary characters."""
        assert tokenize('say "hello world"', 3) == ['"hello', 'world"']

    def test_with_prefix_length(self):
        """The matched length includes the prefix."""
        assert tokenize("!echo hi there", 5) == ["hi", "there"]


class TestParseLine:
    """Test parse_line."""

    def test_parse(self):
        """parse_line combines matching and tokenizing."""
        match = parse_line("echo hello world", NAMES)

        assert match.name == "echo"
        assert match.args == ["hello", "world"]

    def test_parse_bare(self):
        match = parse_line("!help", NAMES, prefix="!")

        assert match.name == "help"
        assert match.args == []

    def test_parse_no_match(self):
        assert parse_line("nothing here", NAMES) is None
