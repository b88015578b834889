"""Ordered task list: owns every task and turns command text into tasks."""

import re
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

from .errors import EmptyArgumentError, IndexOutOfRangeError, UnknownCommandError
from .task import Task, TaskKind


CREATE_KEYWORDS = tuple(kind.keyword for kind in TaskKind)

# Separators split on their first occurrence; a trailing separator means an empty date
DEADLINE_RE = re.compile(r"deadline (.*?) /by(?: (.*))?")
EVENT_RE = re.compile(r"event (.*?) /from(?: (.*?))? /to(?: (.*))?")
TODO_RE = re.compile(r"todo .*")

NumberedTask = Tuple[int, Task]


class TaskList:
    """The ordered list of tasks.

    Insertion order is the display order and the persisted order; there is no
    reordering. Indexes taken by the mutating methods are 0-based.
    """

    def __init__(self, tasks: Optional[List[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks else []

    # -------------------- creation --------------------

    def create_from_command(self, text: str) -> Task:
        """Build a task from the body of a creation command and append it.

        Recognised shapes, checked in order::

            deadline <content> /by <date>
            event <content> /from <start> /to <end>
            todo <content>

        Returns:
            The newly appended task

        Raises:
            EmptyArgumentError: A bare keyword, or empty content/date text
            InvalidDateFormatError: Date text could not be parsed; the list
                is left unchanged
            UnknownCommandError: The text matches none of the shapes
        """
        text = text or ""
        if text in CREATE_KEYWORDS:
            raise EmptyArgumentError(text)

        deadline = DEADLINE_RE.fullmatch(text)
        event = EVENT_RE.fullmatch(text)
        if deadline:
            content, by_text = ((part or "").strip() for part in deadline.group(1, 2))
            if not content or not by_text:
                raise EmptyArgumentError("deadline")
            task = Task.deadline(content, by_text)
        elif event:
            content, from_text, to_text = ((part or "").strip() for part in event.group(1, 2, 3))
            if not content or not from_text or not to_text:
                raise EmptyArgumentError("event")
            task = Task.event(content, from_text, to_text)
        elif TODO_RE.fullmatch(text):
            content = text[len("todo "):].strip()
            if not content:
                raise EmptyArgumentError("todo")
            task = Task.todo(content)
        else:
            raise UnknownCommandError(text)

        self._tasks.append(task)
        return task

    def add(self, task: Task) -> None:
        """Append a pre-built task."""
        self._tasks.append(task)

    # -------------------- index operations --------------------

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._tasks):
            raise IndexOutOfRangeError(index, len(self._tasks))

    def get(self, index: int) -> Task:
        self._check_index(index)
        return self._tasks[index]

    def delete(self, index: int) -> Task:
        """Remove and return the task at ``index``."""
        self._check_index(index)
        return self._tasks.pop(index)

    def mark(self, index: int) -> Task:
        task = self.get(index)
        task.mark()
        return task

    def unmark(self, index: int) -> Task:
        task = self.get(index)
        task.unmark()
        return task

    def count(self) -> int:
        return len(self._tasks)

    # -------------------- queries --------------------

    def tasks_on(self, instant: datetime) -> List[NumberedTask]:
        """Deadlines and events occurring at ``instant``.

        Matches are numbered from 1 among the matches only.
        """
        matches = [
            task for task in self._tasks
            if task.kind is not TaskKind.TODO and task.occurs_on(instant)
        ]
        return list(enumerate(matches, start=1))

    def find(self, word: str) -> List[NumberedTask]:
        """Tasks whose content contains ``word``, numbered among matches."""
        matches = [task for task in self._tasks if task.contains_word(word)]
        return list(enumerate(matches, start=1))

    # -------------------- serialization --------------------

    def serialize(self) -> List[str]:
        """Persisted lines, one per task, in list order."""
        return [task.to_line() for task in self._tasks]

    def to_display_text(self) -> str:
        return "\n".join(
            f"{number}. {task.to_display_string()}"
            for number, task in enumerate(self._tasks, start=1)
        )

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __str__(self) -> str:
        return self.to_display_text()

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"TaskList({len(self._tasks)} tasks)"
