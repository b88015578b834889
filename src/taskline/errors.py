"""Error types raised by the taskline core and reported by the CLI layer."""

from typing import List, Optional


class TasklineError(Exception):
    """Base class for all user-facing taskline errors."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)


class EmptyArgumentError(TasklineError):
    """A command keyword was given without the body it needs."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(
            f"Empty argument: '{command}' needs more than just the keyword.",
            suggestions=[f"Type 'help' to see how to use '{command}'"],
        )


class UnknownCommandError(TasklineError):
    """The input does not match any recognised command shape."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(
            f"I'm sorry, but I don't know what '{text}' means.",
            suggestions=["Type 'help' to list the available commands"],
        )


class InvalidDateFormatError(TasklineError):
    """Date text could not be parsed, or denotes an impossible date."""

    def __init__(self, text: str, expected: str):
        self.text = text
        self.expected = expected
        super().__init__(
            f"Invalid date: '{text}'",
            suggestions=[f"Use the format {expected}"],
        )


class IndexOutOfRangeError(TasklineError):
    """A task number is outside the current list bounds."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        if size == 0:
            hint = "Your list is empty"
        else:
            hint = f"Pick a task number between 1 and {size}"
        super().__init__(f"Task number {index + 1} is invalid!", suggestions=[hint])


class StorageCorruptError(TasklineError):
    """A persisted line cannot be rebuilt into a task."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Corrupt task line '{line}': {reason}")
