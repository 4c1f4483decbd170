"""
JSON logging formatter for trollsmile.

Every record becomes one JSON object tagged with the ``trollsmile::cli::log``
prefix. Records about a command carry it as a nested ``command`` object built
from the ``command`` and ``command_args`` extras; a short list of known startup
fields is collected under ``context``. Other extras are not written.
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
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

DEFAULT_PREFIX = "trollsmile::cli::log"

# Extras written under "context"
CONTEXT_FIELDS = ("commands", "path", "log_level", "format_type", "output_file")


class TrollsmileJSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON entries."""

    def __init__(
        self,
        prefix: Optional[str] = None,
        context_fields: Iterable[str] = CONTEXT_FIELDS,
    ):
        """
        Initialize the JSON formatter.

        Args:
            prefix: Log prefix to use. If None, defaults to trollsmile::cli::log
            context_fields: Names of ``extra`` fields collected under ``context``
        """
        super().__init__()
        self.prefix = prefix or DEFAULT_PREFIX
        self.context_fields = tuple(context_fields)

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds"),
            "prefix": self.prefix,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "at": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        command = self._command_of(record)
        if command:
            entry["command"] = command

        context = {
            field: getattr(record, field)
            for field in self.context_fields
            if getattr(record, field, None) is not None
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)

    @staticmethod
    def _command_of(record: logging.LogRecord) -> Optional[Dict[str, Any]]:
        """The command a record is about, or None."""
        name = getattr(record, "command", None)
        if name is None:
            return None
        return {"name": name, "args": list(getattr(record, "command_args", None) or [])}
