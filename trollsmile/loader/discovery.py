"""
Command discovery.

Walks the commands directory recursively, imports every file with a command
extension and wraps each module in a ``CommandDescriptor`` named after the
file. Modules are imported concurrently; registration happens only once every
import has settled, in sorted path order.
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

import asyncio
import importlib.machinery
import importlib.util
import logging
import os
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable, List, Sequence, Union

from ..core.descriptor import CommandDescriptor
from ..core.errors import DiscoveryError
from ..core.registry import CommandRegistry, DuplicatePolicy

logger = logging.getLogger("trollsmile.discovery")

MODULE_NAMESPACE = "trollsmile_commands"
SKIPPED_DIRS = {"__pycache__"}
SKIPPED_FILES = {"__init__.py"}


def command_name(path: Path, extensions: Sequence[str]) -> str:
    """The file's base name with the matching extension stripped."""
    for ext in sorted(extensions, key=len, reverse=True):
        if path.name.endswith(ext):
            return path.name[: -len(ext)]
    return path.stem


def iter_command_files(root: Union[str, Path], extensions: Sequence[str]) -> List[Path]:
    """
    Recursively list command files under ``root``.

    Args:
        root: Commands directory
        extensions: File extensions treated as command modules

    Returns:
        Matching files, sorted

    Raises:
        DiscoveryError: If the directory does not exist or cannot be read
    """
    root = Path(root)
    if not root.is_dir():
        raise DiscoveryError("Commands directory not found", root)

    def on_error(error: OSError):
        raise DiscoveryError(f"Cannot read commands directory: {error}", error.filename)

    files = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRS)
        for filename in filenames:
            if filename in SKIPPED_FILES:
                continue
            if any(filename.endswith(ext) for ext in extensions):
                files.append(Path(dirpath) / filename)

    return sorted(files)


def load_module(path: Path, root: Path, name: str) -> ModuleType:
    """Import a command file under a namespace derived from its relative path."""
    parents = path.relative_to(root).parent.parts
    module_name = ".".join((MODULE_NAMESPACE,) + parents + (name,))

    # Command files are Python source whatever their extension
    loader = importlib.machinery.SourceFileLoader(module_name, str(path))
    spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
    if spec is None or spec.loader is None:
        raise DiscoveryError("Not an importable module", path)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise DiscoveryError(f"Failed to load command module: {e}", path) from e

    return module


def load_descriptor(path: Path, root: Path, extensions: Sequence[str]) -> CommandDescriptor:
    """Import one command file and describe it."""
    name = command_name(path, extensions)
    module = load_module(path, root, name)
    return CommandDescriptor.from_module(name, module, source=path)


async def discover_commands(
    root: Union[str, Path], extensions: Sequence[str] = (".py",)
) -> List[CommandDescriptor]:
    """
    Load every command module under ``root`` concurrently.

    All loads settle before the first failure is raised; every failure is logged.

    Raises:
        DiscoveryError: If any module fails to load
    """
    root = Path(root).resolve()
    files = await asyncio.to_thread(iter_command_files, root, extensions)
    logger.debug(f"Found {len(files)} command files under {root}")

    results = await asyncio.gather(
        *(asyncio.to_thread(load_descriptor, path, root, extensions) for path in files),
        return_exceptions=True,
    )

    descriptors = []
    failures = []
    for path, result in zip(files, results):
        if isinstance(result, BaseException):
            logger.error(
                f"Failed to load command from {path}: {result}", extra={"path": str(path)}
            )
            failures.append(result)
        else:
            descriptors.append(result)

    if failures:
        first = failures[0]
        if isinstance(first, DiscoveryError):
            raise first
        raise DiscoveryError(f"Failed to load commands: {first}") from first

    logger.info(f"Loaded {len(descriptors)} commands from {root}")
    return descriptors


def build_registry(
    descriptors: Iterable[CommandDescriptor],
    policy: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> CommandRegistry:
    """Register descriptors into a fresh registry."""
    registry = CommandRegistry(policy)
    registry.register_all(descriptors)
    return registry


async def load_registry(
    root: Union[str, Path],
    extensions: Sequence[str] = (".py",),
    policy: DuplicatePolicy = DuplicatePolicy.ERROR,
) -> CommandRegistry:
    """Discover commands under ``root`` and build the registry from them."""
    descriptors = await discover_commands(root, extensions)
    return build_registry(descriptors, policy)
