"""Core dispatch components: registry, matcher, dispatcher and reporter."""

from .context import BotContext, Channel, Identity, Message
from .descriptor import DEFAULT_HELP, CommandDescriptor, CommandModule
from .dispatcher import Dispatcher
from .errors import (
    ConfigurationError,
    DiscoveryError,
    DuplicateAliasError,
    DuplicateNameError,
    RegistryError,
    TrollsmileError,
)
from .matcher import LineMatch, match_line, parse_line, tokenize
from .outcome import DispatchOutcome, Failed, Handled, NotFound
from .registry import CommandRegistry, DuplicatePolicy
from .reporter import ErrorReport, OutcomeReporter

__all__ = [
    "BotContext",
    "Channel",
    "Identity",
    "Message",
    "DEFAULT_HELP",
    "CommandDescriptor",
    "CommandModule",
    "Dispatcher",
    "ConfigurationError",
    "DiscoveryError",
    "DuplicateAliasError",
    "DuplicateNameError",
    "RegistryError",
    "TrollsmileError",
    "LineMatch",
    "match_line",
    "parse_line",
    "tokenize",
    "DispatchOutcome",
    "Failed",
    "Handled",
    "NotFound",
    "CommandRegistry",
    "DuplicatePolicy",
    "ErrorReport",
    "OutcomeReporter",
]
