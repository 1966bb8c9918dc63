"""File storage with Result-based error handling.

A thin wrapper around reading and writing whole files, returning Result
types instead of raising exceptions. Every write replaces the complete
file; there is no locking, so the last writer wins.
"""

import json
from pathlib import Path
from typing import Any

from sprint_tracker.domain.shared.result import Err, Ok, Result


class JsonStorage:
    """Low-level JSON and text file I/O.

    This class does not contain any domain logic - just file I/O.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("sprint-data.json"))
        if isinstance(result, Ok):
            data = result.value
        else:
            print(f"Error: {result.error}")
    """

    def load_json(self, path: Path) -> Result[Any, str]:
        """Load JSON data from a file.

        Args:
            path: Path to the JSON file to read.

        Returns:
            Ok(data) if successful, Err(str) with error message if failed.
        """
        try:
            if not path.exists():
                return Err(f"File not found: {path}")

            content = path.read_text(encoding="utf-8")
            return Ok(json.loads(content))

        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def save_json(
        self,
        path: Path,
        data: dict[str, Any],
        indent: int = 2,
    ) -> Result[None, str]:
        """Serialize ``data`` as pretty-printed UTF-8 JSON, replacing the file.

        Args:
            path: Path to the JSON file to write.
            data: Dictionary to serialize as JSON.
            indent: JSON indentation level (default 2).

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        try:
            content = json.dumps(data, indent=indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            return Err(f"Data not JSON serializable: {e}")
        return self.save_text(path, content + "\n")

    def save_text(self, path: Path, content: str) -> Result[None, str]:
        """Write ``content`` to ``path`` as UTF-8, replacing the file."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            return Ok(None)

        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")
