"""taskline - a line-oriented personal task tracker."""

__version__ = "0.1.0"

from .task import Task, TaskKind
from .task_list import TaskList
from .errors import (
    TasklineError,
    EmptyArgumentError,
    UnknownCommandError,
    InvalidDateFormatError,
    IndexOutOfRangeError,
    StorageCorruptError,
)

__all__ = [
    "Task",
    "TaskKind",
    "TaskList",
    "TasklineError",
    "EmptyArgumentError",
    "UnknownCommandError",
    "InvalidDateFormatError",
    "IndexOutOfRangeError",
    "StorageCorruptError",
    "__version__",
]
