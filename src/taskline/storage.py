"""Storage layer for taskline using a flat file with one task per line."""

import logging
import shutil
from datetime import datetime
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import ConfigModel
from .errors import StorageCorruptError
from .task import FIELD_SEPARATOR, Task, TaskKind
from .task_list import TaskList


logger = logging.getLogger(__name__)


class TaskLineFormat:
    """Handles conversion between Task objects and persisted lines.

    Line layout: ``<TAG>|<done>|<content>[|<date>...]``. The separator is not
    escaped, so content containing it cannot be reloaded.
    """

    @staticmethod
    def to_line(task: Task) -> str:
        """Convert a task to its persisted line."""
        return task.to_line()

    @staticmethod
    def from_line(line: str) -> Task:
        """Parse a persisted line back to a Task.

        Raises:
            StorageCorruptError: If the line cannot form a valid task
        """
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < 3:
            raise StorageCorruptError(line, "too few fields")

        tag, done_flag, content = parts[0], parts[1], parts[2]
        try:
            kind = TaskKind.from_tag(tag)
        except ValueError:
            raise StorageCorruptError(line, f"unknown task type '{tag}'") from None

        if done_flag not in ("0", "1"):
            raise StorageCorruptError(line, f"invalid done flag '{done_flag}'")

        return Task.rehydrate(kind, content, done_flag == "1", *parts[3:])


@dataclass
class LoadDiagnostic:
    """A persisted line that was skipped while loading."""
    line_number: int
    line: str
    error: StorageCorruptError


@dataclass
class LoadResult:
    """Tasks recovered from storage plus the lines that had to be skipped."""
    tasks: TaskList
    diagnostics: List[LoadDiagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class Storage:
    """File-based storage for the task list."""

    def __init__(self, config: ConfigModel, path: Optional[Path] = None):
        self.config = config
        self.path = Path(path) if path else config.get_data_path()
        self._backed_up = False

    def load(self) -> LoadResult:
        """Load the task list, skipping corrupt lines.

        A missing file gives an empty list. Corrupt lines never abort the
        load; each one is logged and reported in ``diagnostics``.
        """
        tasks = TaskList()
        result = LoadResult(tasks)

        if not self.path.exists():
            logger.info("%s not found, starting a new task list", self.path)
            return result

        with open(self.path, "rb") as f:
            content = f.read()

        # Split on newline only; content may hold other line-break characters
        for line_number, raw in enumerate(content.split(b"\n"), start=1):
            raw = raw.rstrip(b"\r")
            line = raw.decode("utf-8", errors="replace")
            if not line.strip():
                continue
            try:
                tasks.add(self._parse_line(raw))
            except StorageCorruptError as e:
                logger.warning("Skipping line %d of %s: %s", line_number, self.path, e.reason)
                result.diagnostics.append(LoadDiagnostic(line_number, line, e))

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return result

    @staticmethod
    def _parse_line(raw: bytes) -> Task:
        """Decode one stored line and rebuild its task."""
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise StorageCorruptError(raw.decode("utf-8", errors="replace"), "not valid UTF-8") from None
        return TaskLineFormat.from_line(line)

    def save(self, tasks: TaskList) -> None:
        """Overwrite the tasks file with the serialized list."""
        if self.config.auto_backup and not self._backed_up:
            self.backup()
            self._backed_up = True

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("\n".join(tasks.serialize()))
        logger.debug("Saved %d task(s) to %s", len(tasks), self.path)

    def backup(self, backup_path: Optional[Path] = None) -> Optional[Path]:
        """Copy the tasks file aside.

        Returns:
            Path of the backup, or None if there is no tasks file yet
        """
        if not self.path.exists():
            return None

        if backup_path is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            backup_dir = self.config.get_backup_path(timestamp)
            backup_dir.mkdir(parents=True, exist_ok=True)
            backup_path = backup_dir / self.path.name

        shutil.copy2(self.path, backup_path)
        logger.info("Backed up %s to %s", self.path, backup_path)
        return backup_path
