"""Tests for the session state machine driven by key events."""

import pendulum
import pytest

from daykeep.model.key import Key, KeyKind
from daykeep.repository.persistence import PersistenceGateway
from daykeep.repository.task import TaskStore
from daykeep.service.form import FieldFocus
from daykeep.service.session import Session, handle_key
from daykeep.service.view_state import (
    AddEditState,
    MessageLevel,
    NotesState,
    OverdueReviewState,
    TaskListState,
    ViewMode,
)
from daykeep.time import time_to_str

ENTER = Key(KeyKind.ENTER)
ESC = Key(KeyKind.ESC)
TAB = Key(KeyKind.TAB)
SAVE = Key(KeyKind.SAVE)
QUIT = Key(KeyKind.QUIT)
BACKSPACE = Key(KeyKind.BACKSPACE)


def press(session, *keys):
    for key in keys:
        handle_key(session, key)


def type_text(session, text):
    for char in text:
        handle_key(session, Key.of(char))


@pytest.fixture
def clock(make_clock):
    return make_clock(2024, 1, 10, 12, 0)


@pytest.fixture
def session(store, clock):
    return Session(store, clock=clock)


# --- Task list ---


class TestTaskList:
    def test_starts_on_today(self, session, day):
        assert isinstance(session.state, TaskListState)
        assert session.state.date == day
        assert session.state.selected is None

    def test_existing_tasks_select_first(self, clock, day):
        store = TaskStore()
        store.add("One", day, "13:00", "14:00")
        session = Session(store, clock=clock)
        assert session.state.selected == 0

    def test_new_then_cancel(self, session):
        press(session, Key.of("n"))
        assert isinstance(session.state, AddEditState)
        press(session, ESC)
        assert isinstance(session.state, TaskListState)
        assert len(session.store) == 0

    def test_add_through_form(self, session, day):
        press(session, Key.of("n"))
        type_text(session, "Standup")
        press(session, TAB)
        type_text(session, "13:00")
        press(session, TAB)
        type_text(session, "13:15")
        press(session, ENTER)

        assert isinstance(session.state, TaskListState)
        tasks = session.store.tasks_for(day)
        assert [t["description"] for t in tasks] == ["Standup"]
        assert time_to_str(tasks[0]["end"]) == "13:15"
        assert session.state.selected == 0

    def test_new_task_is_selected_after_commit(self, session, day):
        session.store.add("Early", day, "08:00", "09:00")
        session.store.add("Late", day, "18:00", "19:00")
        press(session, Key.of("n"))
        type_text(session, "Middle")
        press(session, TAB)
        type_text(session, "12:00")
        press(session, TAB)
        type_text(session, "13:00")
        press(session, ENTER)

        assert session.state.selected == 1

    def test_invalid_form_stays_open(self, session):
        press(session, Key.of("n"))
        type_text(session, "Backwards")
        press(session, TAB)
        type_text(session, "10:00")
        press(session, TAB)
        type_text(session, "09:00")
        press(session, ENTER)

        assert isinstance(session.state, AddEditState)
        assert session.state.draft.error is not None
        assert session.message.level == MessageLevel.ERROR
        assert len(session.store) == 0

    def test_typing_clears_form_error(self, session):
        press(session, Key.of("n"), ENTER)
        assert session.state.draft.error is not None
        type_text(session, "x")
        assert session.state.draft.error is None

    def test_edit_selected(self, session, day):
        task_id = session.store.add("Standup", day, "09:00", "09:15")
        session.state = TaskListState(day, 0)

        press(session, Key.of("e"))
        assert isinstance(session.state, AddEditState)
        assert session.state.draft.focus == FieldFocus.DESCRIPTION
        press(session, BACKSPACE, BACKSPACE)
        type_text(session, "-up")
        press(session, ENTER)

        assert session.store.get(task_id)["description"] == "Stand-up"
        assert isinstance(session.state, TaskListState)

    def test_edit_without_selection(self, session):
        press(session, Key.of("e"))
        assert isinstance(session.state, TaskListState)
        assert session.message.text == "No task selected"

    def test_toggle_and_delete(self, session, day):
        first = session.store.add("One", day, "09:00", "10:00")
        second = session.store.add("Two", day, "10:00", "11:00")
        session.state = TaskListState(day, 1)

        press(session, Key.of(" "))
        assert session.store.get(second)["completed"] is True

        press(session, Key.of("d"))
        assert [t["id"] for t in session.store.all_tasks()] == [first]
        assert session.state.selected == 0

        press(session, Key.of("d"))
        assert len(session.store) == 0
        assert session.state.selected is None

    def test_selection_wraps(self, session, day):
        session.store.add("One", day, "09:00", "10:00")
        session.store.add("Two", day, "10:00", "11:00")
        session.state = TaskListState(day, 0)

        press(session, Key.of("k"))
        assert session.state.selected == 1
        press(session, Key(KeyKind.DOWN))
        assert session.state.selected == 0

    def test_day_navigation(self, session, day):
        press(session, Key.of("l"), Key.of("l"))
        assert session.state.date == day.add(days=2)
        press(session, Key(KeyKind.LEFT))
        assert session.state.date == day.add(days=1)
        press(session, Key.of("t"))
        assert session.state.date == day

    def test_new_task_uses_viewed_date(self, session, day):
        press(session, Key.of("l"), Key.of("n"))
        type_text(session, "Tomorrow")
        press(session, TAB)
        type_text(session, "09:00")
        press(session, TAB)
        type_text(session, "10:00")
        press(session, ENTER)

        assert len(session.store.tasks_for(day.add(days=1))) == 1
        assert session.state.date == day.add(days=1)


# --- Notes ---


class TestNotes:
    def test_tab_toggles_notes(self, session, day):
        press(session, TAB)
        assert isinstance(session.state, NotesState)
        press(session, TAB)
        assert isinstance(session.state, TaskListState)
        assert session.state.date == day

    def test_typing_updates_store(self, session):
        press(session, TAB)
        type_text(session, "buy milk")
        press(session, ENTER)
        type_text(session, "quit smoking")

        assert session.store.notes() == "buy milk\nquit smoking"
        assert session.store.is_dirty
        assert not session.should_quit

    def test_notes_editing_keys(self, session):
        session.notes_editor.load("abc")
        press(session, TAB, BACKSPACE, Key(KeyKind.HOME), Key(KeyKind.DELETE))
        assert session.store.notes() == "b"

    def test_returns_to_today(self, session, day):
        press(session, Key.of("l"), TAB, TAB)
        assert session.state.date == day


# --- Overdue review ---


@pytest.fixture
def overdue_session(store, clock, day):
    store.add("Yesterday", day.subtract(days=1), "09:00", "10:00")
    store.add("This morning", day, "08:00", "09:00")
    store.add("Later", day, "15:00", "16:00")
    store.mark_clean()
    return Session(store, clock=clock)


class TestOverdueReview:
    def test_no_overdue(self, session):
        press(session, Key.of("o"))
        assert isinstance(session.state, TaskListState)
        assert session.message.text == "No overdue tasks"

    def test_enter_and_leave(self, overdue_session, day):
        press(overdue_session, Key.of("l"), Key.of("o"))
        state = overdue_session.state
        assert isinstance(state, OverdueReviewState)
        assert state.target_date == day
        assert state.selected == 0
        press(overdue_session, ESC)
        assert overdue_session.state.date == day.add(days=1)

    def test_move_to_tomorrow(self, overdue_session, day):
        press(overdue_session, Key.of("o"), Key.of("m"))

        tasks = overdue_session.store.tasks_for(day.add(days=1))
        assert [t["description"] for t in tasks] == ["Yesterday"]
        assert overdue_session.message.text == "Moved to 2024-01-11"
        assert len(overdue_session.store.overdue(overdue_session.now())) == 1
        assert overdue_session.state.selected == 0

    def test_move_to_today_refused_when_still_overdue(self, overdue_session, day):
        press(overdue_session, Key.of("o"), Key.of("t"))

        assert overdue_session.store.get(1)["date"] == day.subtract(days=1)
        assert overdue_session.message.level == MessageLevel.WARNING
        assert len(overdue_session.store.overdue(overdue_session.now())) == 2
        assert isinstance(overdue_session.state, OverdueReviewState)

    def test_enter_on_today_target_refused_when_still_overdue(self, overdue_session, day):
        press(overdue_session, Key.of("o"), ENTER)
        assert overdue_session.store.get(1)["date"] == day.subtract(days=1)
        assert overdue_session.message.level == MessageLevel.WARNING

    def test_move_to_today_clears_overdue(self, store, clock, day):
        task_id = store.add("Afternoon slot", day.subtract(days=1), "13:00", "14:00")
        session = Session(store, clock=clock)

        press(session, Key.of("o"), Key.of("t"))

        assert store.get(task_id)["date"] == day
        assert store.overdue(session.now()) == []
        assert session.message.text == "Moved to 2024-01-10"

    def test_pick_target_date(self, overdue_session, day):
        press(overdue_session, Key.of("o"), Key.of("l"), Key.of("l"), Key.of("h"))
        assert overdue_session.state.target_date == day.add(days=1)
        press(overdue_session, ENTER)
        assert len(overdue_session.store.tasks_for(day.add(days=1))) == 1

    def test_target_cannot_go_before_today(self, overdue_session, day):
        press(overdue_session, Key.of("o"), Key.of("h"))
        assert overdue_session.state.target_date == day

    def test_target_before_today_when_allowed(self, store, clock, day):
        store.add("Old", day.subtract(days=3), "09:00", "10:00")
        session = Session(store, clock=clock, allow_past_reschedule=True)
        press(session, Key.of("o"), Key.of("h"), ENTER)
        assert store.get(1)["date"] == day.subtract(days=1)

    def test_complete_from_review(self, overdue_session):
        press(overdue_session, Key.of("o"), Key.of("j"), Key.of(" "))
        overdue = overdue_session.store.overdue(overdue_session.now())
        assert [t["description"] for t in overdue] == ["Yesterday"]
        assert overdue_session.state.selected == 0

    def test_q_quits_from_review(self, overdue_session):
        press(overdue_session, Key.of("o"), Key.of("q"))
        assert overdue_session.should_quit


# --- Saving and quitting ---


class TestSaveAndQuit:
    def test_quit_when_clean(self, session):
        press(session, Key.of("q"))
        assert session.should_quit

    def test_q_in_form_is_text(self, session):
        press(session, Key.of("n"), Key.of("q"))
        assert not session.should_quit
        assert session.state.draft.description.text() == "q"

    def test_save_key(self, store, clock, tmp_path, day):
        gateway = PersistenceGateway(tmp_path / "data.yaml")
        session = Session(store, gateway, clock=clock)
        store.add("One", day, "09:00", "10:00")

        press(session, SAVE)

        assert gateway.exists()
        assert not store.is_dirty
        assert session.message.text == "Saved"

    def test_save_without_gateway(self, session, day):
        session.store.add("One", day, "09:00", "10:00")
        press(session, SAVE)
        assert session.message.level == MessageLevel.WARNING
        assert session.store.is_dirty

    def test_quit_saves_when_enabled(self, store, clock, tmp_path, day):
        gateway = PersistenceGateway(tmp_path / "data.yaml")
        session = Session(store, gateway, clock=clock, save_on_quit=True)
        press(session, TAB)
        type_text(session, "remember")

        press(session, QUIT)

        assert session.should_quit
        assert gateway.load().notes() == "remember"

    def test_quit_without_save_asks_twice(self, store, clock, tmp_path, day):
        gateway = PersistenceGateway(tmp_path / "data.yaml")
        session = Session(store, gateway, clock=clock, save_on_quit=False)
        store.add("One", day, "09:00", "10:00")

        press(session, Key.of("q"))
        assert not session.should_quit
        assert session.quit_pending
        assert session.message.level == MessageLevel.WARNING

        press(session, Key.of("q"))
        assert session.should_quit
        assert not gateway.exists()

    def test_other_key_disarms_quit(self, store, clock, day):
        session = Session(store, clock=clock, save_on_quit=False)
        store.add("One", day, "09:00", "10:00")
        press(session, Key.of("q"), Key.of("j"), Key.of("q"))
        assert not session.should_quit

    def test_failed_save_on_quit_keeps_running(self, store, clock, tmp_path, day):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        session = Session(store, PersistenceGateway(blocker / "data.yaml"), clock=clock)
        store.add("One", day, "09:00", "10:00")

        press(session, QUIT)
        assert not session.should_quit
        assert session.message.level == MessageLevel.ERROR

        press(session, QUIT)
        assert session.should_quit


class TestOpen:
    def test_loads_existing_data(self, tmp_path, clock, day):
        gateway = PersistenceGateway(tmp_path / "data.yaml")
        store = TaskStore(notes="hello")
        store.add("One", day, "13:00", "14:00")
        gateway.save(store)

        session = Session.open(gateway, clock=clock)

        assert session.notes_editor.text() == "hello"
        assert session.state.selected == 0
        assert session.message is None

    def test_corrupt_file_starts_empty_with_warning(self, tmp_path, clock):
        path = tmp_path / "data.yaml"
        path.write_text("tasks: [unclosed\n")

        session = Session.open(PersistenceGateway(path), clock=clock)

        assert len(session.store) == 0
        assert session.message.level == MessageLevel.WARNING

    @pytest.mark.parametrize("content", ["just some text\n", "- a\n- b\n", "42\n"])
    def test_non_mapping_file_starts_empty(self, tmp_path, clock, content):
        path = tmp_path / "data.yaml"
        path.write_text(content)

        session = Session.open(PersistenceGateway(path), clock=clock)

        assert len(session.store) == 0
        assert session.message.level == MessageLevel.WARNING


class TestSnapshot:
    def test_task_list_snapshot(self, overdue_session, day):
        snapshot = overdue_session.snapshot()
        assert snapshot.mode == ViewMode.TASK_LIST
        assert snapshot.today == day
        assert [t["description"] for t in snapshot.day_tasks] == [
            "This morning",
            "Later",
        ]
        assert snapshot.summary == {"total": 2, "pending": 2, "done": 0}
        assert [t["description"] for t in snapshot.overdue] == [
            "Yesterday",
            "This morning",
        ]
        assert snapshot.draft is None

    def test_form_snapshot(self, session):
        press(session, Key.of("n"))
        type_text(session, "Hi")
        press(session, TAB)
        type_text(session, "9")

        draft = session.snapshot().draft
        assert session.snapshot().mode == ViewMode.ADD_EDIT
        assert draft.is_new
        assert draft.description == "Hi"
        assert draft.start == "9"
        assert draft.focus == FieldFocus.START
        assert draft.cursor_col == 1

    def test_notes_snapshot(self, session):
        press(session, TAB)
        type_text(session, "a")
        press(session, ENTER)
        snapshot = session.snapshot()
        assert snapshot.mode == ViewMode.NOTES
        assert snapshot.notes_lines == ("a", "")
        assert snapshot.notes_cursor == (1, 0)
        assert snapshot.is_dirty

    def test_snapshot_is_detached(self, overdue_session):
        snapshot = overdue_session.snapshot()
        snapshot.day_tasks[0]["description"] = "changed"
        assert overdue_session.snapshot().day_tasks[0]["description"] == "This morning"
