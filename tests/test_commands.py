"""Tests for line-oriented command dispatch."""

import pytest

from taskline.commands import CommandDispatcher
from taskline.errors import (
    EmptyArgumentError,
    IndexOutOfRangeError,
    InvalidDateFormatError,
    UnknownCommandError,
)
from taskline.task_list import TaskList


@pytest.fixture
def dispatcher(storage) -> CommandDispatcher:
    return CommandDispatcher(TaskList(), storage)


class TestCreateCommands:
    """Test todo/deadline/event through the dispatcher."""

    def test_todo_adds_and_saves(self, dispatcher, data_file):
        result = dispatcher.execute("todo read book")

        assert result.changed
        assert result.render() == (
            "Got it. I've added this task:\n"
            "  [T][ ] read book\n"
            "Now you have 1 task in the list."
        )
        assert data_file.read_text(encoding="utf-8") == "T|0|read book"

    def test_count_line_uses_plural(self, dispatcher):
        dispatcher.execute("todo a")
        result = dispatcher.execute("todo b")
        assert result.footer == "Now you have 2 tasks in the list."

    def test_bare_keyword(self, dispatcher, data_file):
        with pytest.raises(EmptyArgumentError):
            dispatcher.execute("deadline")
        assert not data_file.exists()

    def test_empty_date_after_separator(self, dispatcher, data_file):
        with pytest.raises(EmptyArgumentError):
            dispatcher.execute("deadline return book /by ")
        assert not data_file.exists()

    def test_bad_date_does_not_save(self, dispatcher, data_file):
        with pytest.raises(InvalidDateFormatError):
            dispatcher.execute("deadline return book /by 2/13/2019 1800")
        assert len(dispatcher.tasks) == 0
        assert not data_file.exists()


class TestIndexCommands:
    """Test mark/unmark/delete."""

    def setup_method(self):
        self.dispatcher = CommandDispatcher(TaskList())
        self.dispatcher.execute("todo read book")
        self.dispatcher.execute("deadline return book /by 2/12/2019 1800")

    def test_mark(self):
        result = self.dispatcher.execute("mark 2")

        assert result.message == "Nice! I've marked this task as done:"
        assert str(result.rows[0][1]) == "[D][X] return book (by: Dec 02 2019 18:00)"

    def test_unmark(self):
        self.dispatcher.execute("mark 1")
        result = self.dispatcher.execute("unmark 1")

        assert result.message == "OK, I've marked this task as not done yet:"
        assert self.dispatcher.tasks.get(0).done is False

    def test_delete(self):
        result = self.dispatcher.execute("delete 1")

        assert result.message == "Noted. I've removed this task:"
        assert result.footer == "Now you have 1 task in the list."
        assert len(self.dispatcher.tasks) == 1

    def test_number_is_one_based(self):
        with pytest.raises(IndexOutOfRangeError):
            self.dispatcher.execute("delete 3")
        with pytest.raises(IndexOutOfRangeError):
            self.dispatcher.execute("mark 0")
        assert len(self.dispatcher.tasks) == 2

    def test_missing_number(self):
        with pytest.raises(EmptyArgumentError):
            self.dispatcher.execute("mark")

    def test_non_numeric_number(self):
        with pytest.raises(UnknownCommandError):
            self.dispatcher.execute("unmark two")


class TestQueryCommands:
    """Test list, find and occurs."""

    def setup_method(self):
        self.dispatcher = CommandDispatcher(TaskList())
        self.dispatcher.execute("todo read book")
        self.dispatcher.execute("event meeting /from 1/1/2020 0900 /to 1/1/2020 1000")
        self.dispatcher.execute("deadline return book /by 1/1/2020 0930")

    def test_list(self):
        result = self.dispatcher.execute("list")

        assert not result.changed
        assert [number for number, _ in result.rows] == [1, 2, 3]

    def test_list_empty(self):
        assert CommandDispatcher(TaskList()).execute("list").message == "Your list is empty."

    def test_find(self):
        result = self.dispatcher.execute("find book")

        assert result.message == "Here are the matching tasks in your list:"
        assert result.render().splitlines()[1:] == [
            "1. [T][ ] read book",
            "2. [D][ ] return book (by: Jan 01 2020 09:30)",
        ]

    def test_find_without_match(self):
        assert self.dispatcher.execute("find pen").rows == []

    def test_find_without_word(self):
        with pytest.raises(EmptyArgumentError):
            self.dispatcher.execute("find")

    def test_occurs(self):
        result = self.dispatcher.execute("occurs 1/1/2020 0930")

        assert result.message == "Here are the tasks occurring on Jan 01 2020 09:30:"
        assert [task.content for _, task in result.rows] == ["meeting", "return book"]
        assert [number for number, _ in result.rows] == [1, 2]

    def test_occurs_bad_date(self):
        with pytest.raises(InvalidDateFormatError):
            self.dispatcher.execute("occurs today")


class TestMiscCommands:
    """Test help, bye and unknown input."""

    def test_help_lists_commands(self):
        result = CommandDispatcher(TaskList()).execute("help")
        for usage in ("todo <description>", "mark <task number>", "occurs <date>"):
            assert usage in result.message

    @pytest.mark.parametrize("line", ["bye", "exit"])
    def test_bye(self, line):
        result = CommandDispatcher(TaskList()).execute(line)
        assert result.exit

    @pytest.mark.parametrize("line", ["", "   ", "blah", "Todo read book"])
    def test_unknown(self, line):
        with pytest.raises(UnknownCommandError):
            CommandDispatcher(TaskList()).execute(line)
