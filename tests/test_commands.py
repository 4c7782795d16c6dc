"""Tests for the generic add/query/update operations."""

from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest

from gtd import commands
from gtd.adapters.file_store import FileTaskStore
from gtd.adapters.memory_store import InMemoryTaskStore
from gtd.core.task_list import TaskList
from gtd.core.tasks import Task
from gtd.errors import InvalidInputError, NotFoundError, ParseError


@pytest.fixture
def store():
    return InMemoryTaskStore(
        [
            "Buy milk\t0\t2024-01-01\n",
            "File taxes\t1\t2024-04-30\n",
            f"Water plants\t0\t{date.today().isoformat()}\n",
        ]
    )


class TestParsing:
    def test_parse_due_date(self):
        assert commands.parse_due_date("2024-01-01") == date(2024, 1, 1)

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "tomorrow",
            "2024-13-01",
            "01-01-2024",
            "2024-1-1",
            " 2024-01-01",
            "2024-01-01x",
            "\uff12\uff10\uff12\uff14-01-01",
        ],
    )
    def test_parse_due_date_rejects(self, raw):
        with pytest.raises(ParseError, match="Error reading date"):
            commands.parse_due_date(raw)

    def test_parse_task_id(self):
        assert commands.parse_task_id("3") == 3
        assert commands.parse_task_id("3\n") == 3
        assert commands.parse_task_id("+3") == 3
        assert commands.parse_task_id("-1") == -1
        assert commands.parse_task_id(7) == 7

    @pytest.mark.parametrize("raw", ["three", "", " 3", "1_0", "\u0663", "3.0", "0x3"])
    def test_parse_task_id_rejects(self, raw):
        with pytest.raises(InvalidInputError, match="Task num not recognised"):
            commands.parse_task_id(raw)

    def test_parse_due_date_keeps_small_years(self):
        assert commands.parse_due_date("0999-01-01") == date(999, 1, 1)


class TestAdd:
    def test_appends_pending_task(self, store):
        assert commands.add(store, "Call mum", "2024-02-01") == "Done."
        task_list = store.load()
        assert len(task_list) == 4
        added = task_list.get_by_id(3)
        assert added == Task(description="Call mum", done=False, due=date(2024, 2, 1))

    def test_bad_date_saves_nothing(self, store):
        with pytest.raises(ParseError):
            commands.add(store, "Call mum", "soon")
        assert store.saves == 0
        assert len(store.load()) == 3

    @pytest.mark.parametrize("description", ["a\tb", "a\nb"])
    def test_rejects_unstorable_description(self, store, description):
        with pytest.raises(InvalidInputError):
            commands.add(store, description, "2024-01-01")
        assert store.saves == 0

    def test_rejects_undecodable_description(self, store):
        with pytest.raises(InvalidInputError):
            commands.add(store, "bad \udcff byte", "2024-01-01")
        assert store.saves == 0

    def test_empty_description_allowed(self, store):
        commands.add(store, "", "2024-01-01")
        assert store.load().get_by_id(3).description == ""


class TestQueryOne:
    def test_renders_task(self, store):
        assert commands.query_one(store, "0") == "'Buy milk' due 1 January 2024"

    def test_done_task(self, store):
        assert commands.query_one(store, 1).endswith("(DONE)")

    def test_negative_id(self, store):
        with pytest.raises(NotFoundError, match="must not be negative"):
            commands.query_one(store, "-1")

    def test_out_of_range(self, store):
        with pytest.raises(NotFoundError, match="Task not found"):
            commands.query_one(store, "3")

    def test_non_numeric(self, store):
        with pytest.raises(InvalidInputError):
            commands.query_one(store, "x")


class TestQueryMany:
    def test_pending(self, store):
        result = commands.query_many(store, commands.select_pending)
        assert "0: 'Buy milk'" in result
        assert "2: 'Water plants'" in result
        assert "File taxes" not in result

    def test_due_today(self, store):
        result = commands.query_many(store, commands.select_due_today)
        assert result.startswith("2: 'Water plants'")
        assert result.count("\n") == 1

    def test_all(self, store):
        result = commands.query_many(store, commands.select_all)
        assert result.count("\n") == 3
        assert "1: 'File taxes' due 30 April 2024 (DONE)" in result

    def test_custom_selector(self, store):
        def overdue(task_list: TaskList) -> TaskList:
            return task_list.select(lambda t: not t.done and t.due < date.today())

        assert commands.query_many(store, overdue) == "0: 'Buy milk' due 1 January 2024\n"

    def test_empty_store(self):
        assert commands.query_many(InMemoryTaskStore(), commands.select_all) == ""

    def test_reloads_every_call(self, store):
        commands.query_many(store, commands.select_all)
        store.lines.append("New\t0\t2024-01-05\n")
        assert "3: 'New'" in commands.query_many(store, commands.select_all)


class TestUpdate:
    def test_tick(self, store):
        assert commands.update(store, "0", commands.tick) == "Done."
        assert store.load().get_by_id(0).done is True
        assert store.saves == 1

    def test_untick(self, store):
        commands.update(store, "1", commands.untick)
        assert store.load().get_by_id(1).done is False

    def test_tick_twice_stays_done(self, store):
        commands.update(store, "0", commands.tick)
        commands.update(store, "0", commands.tick)
        assert store.load().get_by_id(0).done is True

    def test_other_tasks_untouched(self, store):
        before = store.load()
        commands.update(store, "0", commands.tick)
        after = store.load()
        assert after.get_by_id(1) == before.get_by_id(1)
        assert after.get_by_id(2) == before.get_by_id(2)
        assert len(after) == len(before)

    def test_custom_mutator(self, store):
        def postpone(task: Task) -> None:
            task.due = task.due + timedelta(days=7)

        commands.update(store, "0", postpone)
        assert store.load().get_by_id(0).due == date(2024, 1, 8)

    def test_missing_id_saves_nothing(self, store):
        mutator = MagicMock()
        with pytest.raises(NotFoundError):
            commands.update(store, "9", mutator)
        mutator.assert_not_called()
        assert store.saves == 0

    def test_non_numeric_id(self, store):
        with pytest.raises(InvalidInputError):
            commands.update(store, "first", commands.tick)

    def test_uses_persisted_state(self, store):
        stale = store.load()
        stale.get_by_id(2).tick()
        commands.update(store, "0", commands.tick)
        assert store.load().get_by_id(2).done is False


class TestEndToEnd:
    def test_add_tick_list(self, tmp_path):
        store = FileTaskStore(tmp_path / "tasks.txt")

        assert commands.query_many(store, commands.select_all) == ""

        commands.add(store, "Buy milk", "2024-01-01")
        pending = commands.query_many(store, commands.select_pending)
        assert pending == "0: 'Buy milk' due 1 January 2024\n"

        commands.update(store, "0", commands.tick)
        assert commands.query_many(store, commands.select_pending) == ""

        everything = commands.query_many(store, commands.select_all)
        assert everything == "0: 'Buy milk' due 1 January 2024 (DONE)\n"

        assert (tmp_path / "tasks.txt").read_text() == "Buy milk\t1\t2024-01-01\n"
        assert (tmp_path / "tasks.txt.bak").read_text() == "Buy milk\t0\t2024-01-01\n"

    def test_year_below_1000_survives_reload(self, tmp_path):
        store = FileTaskStore(tmp_path / "tasks.txt")

        assert commands.add(store, "Ancient", "0999-01-01") == "Done."
        assert (tmp_path / "tasks.txt").read_text() == "Ancient\t0\t0999-01-01\n"

        assert commands.query_many(store, commands.select_all) == "0: 'Ancient' due 1 January 999\n"
        assert store.skipped_lines == []

        commands.update(store, "0", commands.tick)
        assert commands.query_one(store, "0") == "'Ancient' due 1 January 999 (DONE)"
