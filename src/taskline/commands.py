"""Command dispatch: maps one line of user input onto the task list.

Nothing here prints. Each command returns a :class:`CommandResult` and the
caller decides how to show it; failures surface as
:class:`~taskline.errors.TasklineError` subclasses.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .errors import EmptyArgumentError, UnknownCommandError
from .storage import Storage
from .task import Task
from .task_list import TaskList
from .utils.datetime import INPUT_PATTERN, parse_datetime, stringify


logger = logging.getLogger(__name__)

INDEX_RE = re.compile(r"\d+")

# (display number or None, task)
ResultRow = Tuple[Optional[int], Task]


@dataclass
class CommandResult:
    """Outcome of one command, ready for the presentation layer."""
    message: str
    rows: List[ResultRow] = field(default_factory=list)
    footer: Optional[str] = None
    changed: bool = False
    exit: bool = False

    def render(self) -> str:
        """Plain-text rendering of the result."""
        lines = [self.message] if self.message else []
        for number, task in self.rows:
            if number is None:
                lines.append(f"  {task}")
            else:
                lines.append(f"{number}. {task}")
        if self.footer:
            lines.append(self.footer)
        return "\n".join(lines)


def _count_line(size: int) -> str:
    noun = "task" if size == 1 else "tasks"
    return f"Now you have {size} {noun} in the list."


Handler = Callable[[str, str], CommandResult]


class CommandDispatcher:
    """Line-oriented command handler bound to one task list.

    Mutating commands write the list back through ``storage`` when one is
    given.
    """

    def __init__(self, tasks: TaskList, storage: Optional[Storage] = None):
        self.tasks = tasks
        self.storage = storage
        self._handlers: Dict[str, Handler] = {}
        self._help: Dict[str, str] = {}

        self.register("todo", self._create, "todo <description>", mutates=True)
        self.register("deadline", self._create, "deadline <description> /by <date>", mutates=True)
        self.register("event", self._create,
                      "event <description> /from <date> /to <date>", mutates=True)
        self.register("list", self._list, "list")
        self.register("mark", self._mark, "mark <task number>", mutates=True)
        self.register("unmark", self._unmark, "unmark <task number>", mutates=True)
        self.register("delete", self._delete, "delete <task number>", mutates=True)
        self.register("find", self._find, "find <word>")
        self.register("occurs", self._occurs, "occurs <date>")
        self.register("help", self._show_help, "help")
        self.register("bye", self._bye, "bye", aliases=["exit"])

    def register(
        self,
        name: str,
        handler: Handler,
        usage: str,
        mutates: bool = False,
        aliases: Optional[List[str]] = None,
    ) -> None:
        """Register a command handler under a keyword."""
        if mutates:
            handler = self._saving(handler)
        self._handlers[name] = handler
        self._help[name] = usage
        for alias in aliases or []:
            self._handlers[alias] = handler

    def _saving(self, handler: Handler) -> Handler:
        def wrapped(line: str, args: str) -> CommandResult:
            result = handler(line, args)
            result.changed = True
            if self.storage is not None:
                self.storage.save(self.tasks)
            return result
        return wrapped

    def execute(self, line: str) -> CommandResult:
        """Run one line of user input.

        Raises:
            TasklineError: The command failed; the list is unchanged
        """
        line = (line or "").strip()
        if not line:
            raise UnknownCommandError(line)

        parts = line.split(None, 1)
        keyword = parts[0]
        args = parts[1].strip() if len(parts) > 1 else ""

        handler = self._handlers.get(keyword)
        if handler is None:
            raise UnknownCommandError(line)

        logger.debug("Executing %s command", keyword)
        return handler(line, args)

    # -------------------- helpers --------------------

    @staticmethod
    def _parse_index(keyword: str, line: str, args: str) -> int:
        """Turn a 1-based task number into a list index."""
        if not args:
            raise EmptyArgumentError(keyword)
        if not INDEX_RE.fullmatch(args):
            raise UnknownCommandError(line)
        return int(args) - 1

    # -------------------- handlers --------------------

    def _create(self, line: str, args: str) -> CommandResult:
        task = self.tasks.create_from_command(line)
        logger.info("Added %s task", task.kind.keyword)
        return CommandResult(
            "Got it. I've added this task:",
            rows=[(None, task)],
            footer=_count_line(len(self.tasks)),
        )

    def _list(self, line: str, args: str) -> CommandResult:
        if not len(self.tasks):
            return CommandResult("Your list is empty.")
        return CommandResult(
            "Here are the tasks in your list:",
            rows=list(enumerate(self.tasks, start=1)),
        )

    def _mark(self, line: str, args: str) -> CommandResult:
        task = self.tasks.mark(self._parse_index("mark", line, args))
        return CommandResult("Nice! I've marked this task as done:", rows=[(None, task)])

    def _unmark(self, line: str, args: str) -> CommandResult:
        task = self.tasks.unmark(self._parse_index("unmark", line, args))
        return CommandResult("OK, I've marked this task as not done yet:", rows=[(None, task)])

    def _delete(self, line: str, args: str) -> CommandResult:
        task = self.tasks.delete(self._parse_index("delete", line, args))
        return CommandResult(
            "Noted. I've removed this task:",
            rows=[(None, task)],
            footer=_count_line(len(self.tasks)),
        )

    def _find(self, line: str, args: str) -> CommandResult:
        if not args:
            raise EmptyArgumentError("find")
        matches = self.tasks.find(args)
        if not matches:
            return CommandResult(f"No tasks contain '{args}'.")
        return CommandResult("Here are the matching tasks in your list:", rows=list(matches))

    def _occurs(self, line: str, args: str) -> CommandResult:
        if not args:
            raise EmptyArgumentError("occurs")
        instant = parse_datetime(args)
        matches = self.tasks.tasks_on(instant)
        if not matches:
            return CommandResult(f"No tasks occur on {stringify(instant)}.")
        return CommandResult(
            f"Here are the tasks occurring on {stringify(instant)}:",
            rows=list(matches),
        )

    def _show_help(self, line: str, args: str) -> CommandResult:
        lines = ["Available commands:"]
        lines.extend(f"  {usage}" for usage in self._help.values())
        lines.append(f"Dates are written as {INPUT_PATTERN}.")
        return CommandResult("\n".join(lines))

    def _bye(self, line: str, args: str) -> CommandResult:
        return CommandResult("Bye. Hope to see you again soon!", exit=True)
