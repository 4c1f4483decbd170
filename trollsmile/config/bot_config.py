#!/usr/bin/env python3
"""
Configuration classes for trollsmile.

Provides configuration management for command discovery, the console shell,
the bot identity and logging.
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

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.errors import ConfigurationError
from ..core.registry import DuplicatePolicy

ENV_PREFIX = "TROLLSMILE_"


def _to_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _to_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class IdentityConfig(BaseModel):
    """Display identity of the bot, used in error reports."""

    username: str = Field(default="trollsmile cli", description="Display name of the bot")
    avatar_url: str = Field(default="", description="Icon reference shown next to errors")


class DiscoveryConfig(BaseModel):
    """Configuration for command discovery."""

    commands_dir: str = Field(
        default="./commands", description="Directory walked recursively for command modules"
    )
    extensions: List[str] = Field(
        default_factory=lambda: [".py"], description="File extensions loaded as commands"
    )
    duplicate_policy: DuplicatePolicy = Field(
        default=DuplicatePolicy.ERROR,
        description="Duplicate name/alias handling: error or override",
    )

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v):
        if not v:
            raise ValueError("At least one command file extension is required")
        for ext in v:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"Extension must start with a dot: {ext!r}")
        return v


class ShellConfig(BaseModel):
    """Configuration for the interactive console."""

    prompt: str = Field(default="> ", description="Input prompt")
    logo_file: Optional[str] = Field(
        default="./logo.txt", description="Logo printed at startup when the file exists"
    )
    history_file: Optional[str] = Field(
        default=None, description="Readline history file, disabled when unset"
    )
    use_rich: bool = Field(default=True, description="Render output with rich")


class LoggingConfig(BaseModel):
    """Configuration for trollsmile logging."""

    level: str = Field(default="WARNING", description="Logging level")
    format: str = Field(default="text", description="Log format: json or text")
    output_file: Optional[str] = Field(default=None, description="Log output file path")
    max_file_size_mb: int = Field(default=10, ge=1, description="Maximum log file size in MB")
    backup_count: int = Field(default=3, ge=1, description="Number of backup log files to keep")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v):
        valid_formats = {"json", "text"}
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()


class BotConfig(BaseModel):
    """Main configuration class for trollsmile."""

    prefix: str = Field(default="", description="Text every command line must start with")

    identity: IdentityConfig = Field(
        default_factory=IdentityConfig, description="Bot identity"
    )
    discovery: DiscoveryConfig = Field(
        default_factory=DiscoveryConfig, description="Command discovery configuration"
    )
    shell: ShellConfig = Field(default_factory=ShellConfig, description="Shell configuration")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "BotConfig":
        """Load configuration from a YAML, TOML or JSON file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        data = _read_config_data(path)
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "BotConfig":
        """Load configuration from environment variables.

        Note: Only explicitly set variables are used, everything else keeps the
        model defaults.
        """
        return cls(**_env_data(prefix))

    def to_file(self, config_path: Union[str, Path], format: str = "auto") -> None:
        """Save configuration to a file."""
        path = Path(config_path)

        if format == "auto":
            suffix = path.suffix.lower()
            if suffix in [".yml", ".yaml"]:
                format = "yaml"
            elif suffix == ".toml":
                format = "toml"
            else:
                format = "json"

        data = self.model_dump(mode="json")

        if format == "yaml":
            content = yaml.dump(data, default_flow_style=False, sort_keys=False, indent=2)
        elif format == "toml":
            content = toml.dumps(data)
        else:
            content = json.dumps(data, indent=2)

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def validate_configuration(self) -> List[str]:
        """Validate the configuration and return any warnings."""
        warnings = []

        commands_dir = Path(self.discovery.commands_dir)
        if not commands_dir.exists():
            warnings.append(f"Commands directory does not exist: {commands_dir}")
        elif not commands_dir.is_dir():
            warnings.append(f"Commands path is not a directory: {commands_dir}")

        if self.prefix != self.prefix.strip():
            warnings.append("Prefix has leading or trailing whitespace")

        if self.discovery.duplicate_policy is DuplicatePolicy.OVERRIDE:
            warnings.append("Duplicate commands will silently replace earlier ones")

        if self.shell.logo_file and not Path(self.shell.logo_file).exists():
            warnings.append(f"Logo file not found, using built-in banner: {self.shell.logo_file}")

        return warnings


def _read_config_data(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()

    try:
        if suffix in [".yml", ".yaml"]:
            data = yaml.safe_load(content)
        elif suffix == ".toml":
            data = toml.loads(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError, toml.TomlDecodeError) as e:
        raise ConfigurationError(f"Failed to parse configuration file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}")
    return data


def _env_mappings(prefix: str) -> Dict[str, Tuple[str, Callable[[str], Any]]]:
    return {
        f"{prefix}PREFIX": ("prefix", str),
        f"{prefix}USERNAME": ("identity.username", str),
        f"{prefix}AVATAR_URL": ("identity.avatar_url", str),
        f"{prefix}COMMANDS_DIR": ("discovery.commands_dir", str),
        f"{prefix}EXTENSIONS": ("discovery.extensions", _to_list),
        f"{prefix}DUPLICATE_POLICY": ("discovery.duplicate_policy", str),
        f"{prefix}PROMPT": ("shell.prompt", str),
        f"{prefix}LOGO_FILE": ("shell.logo_file", str),
        f"{prefix}HISTORY_FILE": ("shell.history_file", str),
        f"{prefix}USE_RICH": ("shell.use_rich", _to_bool),
        f"{prefix}LOG_LEVEL": ("logging.level", str),
        f"{prefix}LOG_FORMAT": ("logging.format", str),
        f"{prefix}LOG_FILE": ("logging.output_file", str),
    }


def _env_data(prefix: str) -> Dict[str, Any]:
    """Nested config data built from the environment variables that are set."""
    config_data: Dict[str, Any] = {}

    for env_var, (config_key, converter) in _env_mappings(prefix).items():
        value = os.getenv(env_var)
        if value is None:
            continue
        try:
            converted_value = converter(value)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid value for {env_var}: {value} ({e})") from e

        # Handle nested keys
        parts = config_key.split(".")
        current = config_data
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = converted_value

    return config_data


class ConfigurationManager:
    """Utility class for managing configurations."""

    @staticmethod
    def create_default_config_file(path: Union[str, Path], format: str = "auto") -> None:
        """Create a default configuration file."""
        config = BotConfig()
        config.to_file(path, format)

    @staticmethod
    def merge_configs(*configs: BotConfig) -> BotConfig:
        """Merge multiple configurations, with later configs taking precedence."""
        if not configs:
            return BotConfig()

        merged_data = configs[0].model_dump()

        for config in configs[1:]:
            config_data = config.model_dump(exclude_unset=True)
            merged_data = ConfigurationManager._deep_merge(merged_data, config_data)

        return BotConfig(**merged_data)

    @staticmethod
    def apply_overrides(config: BotConfig, overrides: Dict[str, Any]) -> BotConfig:
        """Return a copy of ``config`` with nested ``overrides`` merged in."""
        if not overrides:
            return config
        merged_data = ConfigurationManager._deep_merge(config.model_dump(), overrides)
        return BotConfig(**merged_data)

    @staticmethod
    def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigurationManager._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def load_config(
        config_file: Optional[Union[str, Path]] = None,
        env_prefix: str = ENV_PREFIX,
        use_env: bool = True,
    ) -> BotConfig:
        """Load configuration from file and/or environment variables.

        A missing file falls back to defaults; an unreadable or invalid one
        raises ``ConfigurationError``.
        """
        base_config = BotConfig()
        if config_file:
            try:
                base_config = BotConfig.from_file(config_file)
            except FileNotFoundError:
                pass

        if use_env:
            env_overrides = _env_data(env_prefix)
            if env_overrides:
                base_data = base_config.model_dump()
                merged_data = ConfigurationManager._deep_merge(base_data, env_overrides)
                try:
                    return BotConfig(**merged_data)
                except ValidationError as e:
                    raise ConfigurationError(f"Invalid environment configuration: {e}") from e

        return base_config
