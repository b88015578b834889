"""Task data model for taskline.

A task is one of three variants, distinguished by its ``kind`` tag:

* ``TODO``: plain to-do with no dates
* ``DEADLINE``: must be done by ``due``
* ``EVENT``: takes place from ``start`` to ``end``

All variants share the same record (content and completion flag); the date
payload depends on the kind. Behaviour that differs per variant dispatches on
the tag.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .errors import EmptyArgumentError, InvalidDateFormatError, StorageCorruptError
from .utils.datetime import (
    parse_datetime,
    parse_stored_datetime,
    stringify,
    truncate_to_minute,
)


FIELD_SEPARATOR = "|"


class TaskKind(Enum):
    """Task variants, valued by their persisted tag."""
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def keyword(self) -> str:
        """Command keyword that creates this variant."""
        return {
            TaskKind.TODO: "todo",
            TaskKind.DEADLINE: "deadline",
            TaskKind.EVENT: "event",
        }[self]

    @property
    def date_count(self) -> int:
        """Number of date fields carried by this variant."""
        return {TaskKind.TODO: 0, TaskKind.DEADLINE: 1, TaskKind.EVENT: 2}[self]

    @classmethod
    def from_tag(cls, tag: str) -> "TaskKind":
        return cls(tag)


@dataclass
class Task:
    """A single tracked task."""

    kind: TaskKind
    content: str
    done: bool = False

    # Variant payload
    due: Optional[datetime] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self):
        """Validate the record against its kind."""
        self.content = self.content.strip() if self.content else ""
        if not self.content:
            raise EmptyArgumentError(self.kind.keyword)

        if self.kind is TaskKind.DEADLINE:
            if self.due is None:
                raise ValueError("A deadline task needs a due date")
            self.due = truncate_to_minute(self.due)
        elif self.kind is TaskKind.EVENT:
            if self.start is None or self.end is None:
                raise ValueError("An event task needs a start and an end")
            # start <= end is left to the caller
            self.start = truncate_to_minute(self.start)
            self.end = truncate_to_minute(self.end)

        if self.kind is not TaskKind.DEADLINE and self.due is not None:
            raise ValueError(f"A {self.kind.keyword} task has no due date")
        if self.kind is not TaskKind.EVENT and (self.start or self.end):
            raise ValueError(f"A {self.kind.keyword} task has no start or end")

    # -------------------- fresh constructors --------------------

    @classmethod
    def todo(cls, content: str) -> "Task":
        """Create a new plain to-do."""
        return cls(TaskKind.TODO, content)

    @classmethod
    def deadline(cls, content: str, by_text: str) -> "Task":
        """Create a new deadline from user date text.

        Raises:
            InvalidDateFormatError: If ``by_text`` is not valid input date text
        """
        return cls(TaskKind.DEADLINE, content, due=parse_datetime(by_text))

    @classmethod
    def event(cls, content: str, from_text: str, to_text: str) -> "Task":
        """Create a new event from user date text.

        Raises:
            InvalidDateFormatError: If either date is not valid input date text
        """
        return cls(
            TaskKind.EVENT,
            content,
            start=parse_datetime(from_text),
            end=parse_datetime(to_text),
        )

    # -------------------- rehydrate constructor --------------------

    @classmethod
    def rehydrate(cls, kind: TaskKind, content: str, done: bool, *stored_dates: str) -> "Task":
        """Rebuild a task from previously persisted fields.

        Date fields must be in stored form. Any failure means the stored data
        is corrupt.

        Raises:
            StorageCorruptError: If the fields cannot form a valid task
        """
        raw = FIELD_SEPARATOR.join(
            [kind.tag, "1" if done else "0", content or ""] + list(stored_dates)
        )
        if len(stored_dates) != kind.date_count:
            raise StorageCorruptError(
                raw, f"expected {kind.date_count} date field(s), got {len(stored_dates)}"
            )
        try:
            dates = [parse_stored_datetime(text) for text in stored_dates]
        except InvalidDateFormatError as e:
            raise StorageCorruptError(raw, e.message) from e

        try:
            if kind is TaskKind.DEADLINE:
                return cls(kind, content, done, due=dates[0])
            if kind is TaskKind.EVENT:
                return cls(kind, content, done, start=dates[0], end=dates[1])
            return cls(kind, content, done)
        except EmptyArgumentError as e:
            raise StorageCorruptError(raw, "empty content") from e

    # -------------------- state --------------------

    def mark(self):
        """Mark the task as done."""
        self.done = True

    def unmark(self):
        """Mark the task as not done."""
        self.done = False

    # -------------------- queries --------------------

    def contains_word(self, word: str) -> bool:
        """Case-sensitive substring match on the content."""
        return word in self.content

    def occurs_on(self, instant: datetime) -> bool:
        """Check whether the task takes place at ``instant``.

        Deadlines occur exactly at their due instant. Events occur at any
        instant from start to end inclusive. To-dos never occur.
        """
        if self.kind is TaskKind.DEADLINE:
            return instant == self.due
        if self.kind is TaskKind.EVENT:
            return (
                instant == self.start
                or self.start < instant < self.end
                or instant == self.end
            )
        return False

    @property
    def dates(self) -> list:
        """Variant dates in persisted order."""
        if self.kind is TaskKind.DEADLINE:
            return [self.due]
        if self.kind is TaskKind.EVENT:
            return [self.start, self.end]
        return []

    # -------------------- formatting --------------------

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def to_display_string(self) -> str:
        """Render the task the way it is shown to the user."""
        text = f"[{self.kind.tag}][{self.status_icon}] {self.content}"
        if self.kind is TaskKind.DEADLINE:
            text += f" (by: {stringify(self.due)})"
        elif self.kind is TaskKind.EVENT:
            text += f" (from: {stringify(self.start)} to: {stringify(self.end)})"
        return text

    def to_line(self) -> str:
        """Render the task as one persisted line."""
        fields = [self.kind.tag, "1" if self.done else "0", self.content]
        fields.extend(stringify(dt) for dt in self.dates)
        return FIELD_SEPARATOR.join(fields)

    def __str__(self) -> str:
        return self.to_display_string()
