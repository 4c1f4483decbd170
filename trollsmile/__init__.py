#!/usr/bin/env python3
"""
trollsmile - a text-command dispatcher

Reads lines of text, matches each against a registry of named commands (with
aliases), runs the matching handler with the parsed arguments and reports the
result or error back through the output channel.

Usage:
    # commands/echo.py
    aliases = ["e"]
    help = "Repeat the first argument"

    def run(context, message, args):
        return args[0] if args else None

    $ trollsmile run --commands-dir ./commands
    > echo hello
    hello

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

__version__ = "1.0.0"
__author__ = "Firefly Software Solutions Inc"
__license__ = "Apache 2.0"

# Configuration
from .config.bot_config import BotConfig, ConfigurationManager

# Core types
from .core import (
    BotContext,
    CommandDescriptor,
    CommandRegistry,
    DiscoveryError,
    Dispatcher,
    DispatchOutcome,
    DuplicateAliasError,
    DuplicateNameError,
    DuplicatePolicy,
    ErrorReport,
    Failed,
    Handled,
    Identity,
    Message,
    NotFound,
    OutcomeReporter,
    TrollsmileError,
    match_line,
    tokenize,
)

# Discovery
from .loader import discover_commands, load_registry

__all__ = [
    "__version__",
    "BotConfig",
    "ConfigurationManager",
    "BotContext",
    "CommandDescriptor",
    "CommandRegistry",
    "DiscoveryError",
    "Dispatcher",
    "DispatchOutcome",
    "DuplicateAliasError",
    "DuplicateNameError",
    "DuplicatePolicy",
    "ErrorReport",
    "Failed",
    "Handled",
    "Identity",
    "Message",
    "NotFound",
    "OutcomeReporter",
    "TrollsmileError",
    "match_line",
    "tokenize",
    "discover_commands",
    "load_registry",
]
