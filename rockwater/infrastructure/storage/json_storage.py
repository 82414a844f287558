"""JSON object files for stack persistence.

Reads and writes whole JSON objects and reports failures as Err values.
Writes go through a temporary file in the target directory, so an
interrupted save never leaves a half-written stack behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from rockwater.domain.shared.result import Err, Ok, Result

JsonObject = dict[str, Any]


class JsonStorage:
    """File access for JSON objects, no domain knowledge.

    Example:
        storage = JsonStorage()
        result = storage.read_object(Path("stack.json"))
        if isinstance(result, Ok):
            stack_data = result.value
    """

    def read_object(self, path: Path) -> Result[JsonObject, str]:
        """Read a file that must contain a single JSON object."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Err(f"File not found: {path}")
        except OSError as e:
            return Err(f"Cannot read {path}: {e.strerror or e}")

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path} (line {e.lineno}): {e.msg}")

        if not isinstance(data, dict):
            return Err(f"Expected a JSON object in {path}, got {type(data).__name__}")
        return Ok(data)

    def write_object(self, path: Path, data: JsonObject, indent: int = 2) -> Result[None, str]:
        """Replace ``path`` with ``data``, creating parent directories.

        The object is serialized before the file is touched, so
        unserializable data leaves any existing file unchanged.
        """
        try:
            text = json.dumps(data, indent=indent) + "\n"
        except (TypeError, ValueError) as e:
            return Err(f"Cannot serialize stack for {path}: {e}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(text)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            return Err(f"Cannot write {path}: {e.strerror or e}")
        return Ok(None)
