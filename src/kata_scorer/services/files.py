import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from returns.result import Result, safe

logger = logging.getLogger(__name__)


class ProjectFiles:
    """Read-only view of the scored project, plus scoped transient files."""

    def __init__(self, base_path: Path | str):
        self.base_path = Path(base_path).resolve()

    def _get_full_path(self, relative_path: str | Path) -> Path:
        """Constructs and validates the absolute path for a file."""
        full_path = (self.base_path / relative_path).resolve()
        if not full_path.is_relative_to(self.base_path):
            raise ValueError(
                f"Path '{relative_path}' attempts to access outside the project directory."
            )
        return full_path

    def _inside(self, relative_path: str | Path) -> Path | None:
        """The absolute path, or None when it resolves outside the project (e.g. a symlink)."""
        try:
            return self._get_full_path(relative_path)
        except ValueError as e:
            logger.debug("ignoring %s", e)
            return None

    def exists(self, relative_path: str | Path) -> bool:
        path = self._inside(relative_path)
        return path is not None and path.exists()

    def is_file(self, relative_path: str | Path) -> bool:
        path = self._inside(relative_path)
        return path is not None and path.is_file()

    def is_dir(self, relative_path: str | Path) -> bool:
        path = self._inside(relative_path)
        return path is not None and path.is_dir()

    def glob(self, pattern: str) -> list[str]:
        """Project-relative POSIX paths matching `pattern`, sorted."""
        return sorted(p.relative_to(self.base_path).as_posix() for p in self.base_path.glob(pattern))

    def files_under(self, relative_dir: str) -> list[str]:
        """Every regular file below `relative_dir`, hidden files included."""
        root = self._inside(relative_dir)
        if root is None or not root.is_dir():
            return []
        return sorted(
            p.relative_to(self.base_path).as_posix() for p in root.rglob("*") if p.is_file()
        )

    def read_text(self, relative_path: str | Path) -> Result[str, str]:
        """Reads a file's text content."""
        return safe(
            lambda: self._get_full_path(relative_path).read_text(encoding="utf-8", errors="replace")
        )().alt(str)

    def read_json(self, relative_path: str | Path) -> Result[Any, str]:
        """Reads and decodes a JSON file."""
        return self.read_text(relative_path).bind(lambda text: safe(json.loads)(text).alt(str))

    @contextmanager
    def transient_file(self, relative_path: str, content: str) -> Iterator[Path]:
        """Writes a file that is removed on every exit path of the block."""
        path = self._get_full_path(relative_path)
        path.write_text(content, encoding="utf-8")
        logger.debug("wrote transient file %s", path)
        try:
            yield path
        finally:
            path.unlink(missing_ok=True)
            logger.debug("removed transient file %s", path)
