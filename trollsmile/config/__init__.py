"""
Configuration module for trollsmile.

Copyright (c) 2025 Firefly Software Solutions Inc.
Licensed under the Apache License, Version 2.0 (the "License");
"""

from .bot_config import (
    BotConfig,
    ConfigurationManager,
    DiscoveryConfig,
    IdentityConfig,
    LoggingConfig,
    ShellConfig,
)

__all__ = [
    "BotConfig",
    "ConfigurationManager",
    "DiscoveryConfig",
    "IdentityConfig",
    "LoggingConfig",
    "ShellConfig",
]
