#!/usr/bin/env python3
"""
Command-line interface for trollsmile.

Starts the interactive shell and provides helpers for inspecting commands and
managing configuration files.

Copyright 2025 Firefly Software Solutions Inc
Licensed under the Apache License, Version 2.0
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from trollsmile import __version__
from trollsmile.config.bot_config import BotConfig, ConfigurationManager
from trollsmile.core.errors import ConfigurationError, TrollsmileError
from trollsmile.loader import load_registry
from trollsmile.logging import setup_trollsmile_logging, shutdown_trollsmile_logging
from trollsmile.shell import TrollsmileShell
from trollsmile.shell.ui import ShellFormatter

logger = logging.getLogger("trollsmile.shell")


def build_config(args: argparse.Namespace) -> BotConfig:
    """Load configuration and apply command-line overrides."""
    config = ConfigurationManager.load_config(args.config)

    overrides = {}
    if getattr(args, "commands_dir", None):
        overrides.setdefault("discovery", {})["commands_dir"] = args.commands_dir
    if getattr(args, "prefix", None) is not None:
        overrides["prefix"] = args.prefix
    if getattr(args, "no_rich", False):
        overrides.setdefault("shell", {})["use_rich"] = False
    if args.log_level:
        overrides.setdefault("logging", {})["level"] = args.log_level
    if args.log_format:
        overrides.setdefault("logging", {})["format"] = args.log_format

    return ConfigurationManager.apply_overrides(config, overrides)


def run_shell(config: BotConfig, shell: Optional[TrollsmileShell] = None) -> int:
    """Run the interactive shell; returns the process exit status."""
    shell = shell or TrollsmileShell(config)

    for warning in config.validate_configuration():
        logger.warning(warning)

    try:
        shell.run()
    except KeyboardInterrupt:
        print("\n\n👋 Goodbye!")
        return 130
    except TrollsmileError as e:
        logger.error(f"Startup failed: {e}", exc_info=True)
        shell.formatter.print_error(f"Startup failed: {e}")
        return 1

    return 0


def list_commands(config: BotConfig) -> int:
    """Print the discovered commands as a table."""
    formatter = ShellFormatter(use_rich=config.shell.use_rich)
    discovery = config.discovery

    try:
        registry = asyncio.run(
            load_registry(discovery.commands_dir, discovery.extensions, discovery.duplicate_policy)
        )
    except TrollsmileError as e:
        logger.error(f"Command discovery failed: {e}", exc_info=True)
        formatter.print_error(f"Command discovery failed: {e}")
        return 1

    rows = [
        [descriptor.name, ", ".join(descriptor.aliases) or "-", descriptor.help]
        for descriptor in registry.list_commands()
    ]
    formatter.print_table(
        f"Commands in {discovery.commands_dir}", ["Command", "Aliases", "Help"], rows
    )
    return 0


def init_config(output: str) -> int:
    """Write a default configuration file."""
    ConfigurationManager.create_default_config_file(output)
    print(f"✅ Configuration written to {output}")
    return 0


def validate_config(config: BotConfig) -> int:
    """Print configuration warnings."""
    warnings = config.validate_configuration()
    formatter = ShellFormatter(use_rich=config.shell.use_rich)
    if not warnings:
        formatter.print_success("Configuration looks good")
        return 0

    for warning in warnings:
        formatter.print_warning(warning)
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trollsmile",
        description="trollsmile - text-command dispatcher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  trollsmile                                 # Start the shell with ./commands
  trollsmile run --commands-dir ./commands   # Start the shell
  trollsmile run --prefix !                  # Require a "!" before commands
  trollsmile commands                        # List discovered commands
  trollsmile init-config trollsmile.yaml     # Create a default configuration
  trollsmile --config trollsmile.yaml validate-config
        """,
    )

    parser.add_argument("--version", action="version", version=f"trollsmile {__version__}")
    parser.add_argument("--config", help="Configuration file (YAML, TOML or JSON)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level",
    )
    parser.add_argument(
        "--log-format", choices=["json", "text"], default=None, help="Set log output format"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Start the interactive shell")
    run_parser.add_argument("--commands-dir", help="Directory to load commands from")
    run_parser.add_argument("--prefix", help="Text every command line must start with")
    run_parser.add_argument("--no-rich", action="store_true", help="Plain text output")

    commands_parser = subparsers.add_parser(
        "commands", help="List discovered commands", aliases=["ls"]
    )
    commands_parser.add_argument("--commands-dir", help="Directory to load commands from")

    init_parser = subparsers.add_parser("init-config", help="Create default configuration file")
    init_parser.add_argument("output", help="Output configuration file path")

    subparsers.add_parser("validate-config", help="Check the configuration for problems")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "init-config":
        sys.exit(init_config(args.output))

    try:
        config = build_config(args)
    except (ConfigurationError, ValueError) as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    setup_trollsmile_logging(config)
    try:
        if args.command in (None, "run"):
            status = run_shell(config)
        elif args.command in ("commands", "ls"):
            status = list_commands(config)
        elif args.command == "validate-config":
            status = validate_config(config)
        else:
            parser.print_help()
            status = 1
    finally:
        shutdown_trollsmile_logging()

    sys.exit(status)


if __name__ == "__main__":
    main()
