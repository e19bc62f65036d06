# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

import pendulum

from daykeep.errors import NotFound, PersistenceFailure, ValidationError
from daykeep.model.key import Key, KeyKind
from daykeep.model.task import Task, TaskId
from daykeep.repository.persistence import PersistenceGateway
from daykeep.repository.task import TaskStore
from daykeep.service.editor import CursorMove, EditorBuffer
from daykeep.service.form import FormDraft
from daykeep.service.schedule import clamp_selection, reschedule_task, step_selection
from daykeep.service.view_state import (
    AddEditState,
    DraftSnapshot,
    MessageLevel,
    NotesState,
    OverdueReviewState,
    Snapshot,
    StatusMessage,
    TaskListState,
    ViewState,
    mode_of,
)
from daykeep.time import date_from_value, is_before, now_local

logger = logging.getLogger(__name__)

CURSOR_KEYS = {
    KeyKind.LEFT: CursorMove.LEFT,
    KeyKind.RIGHT: CursorMove.RIGHT,
    KeyKind.UP: CursorMove.UP,
    KeyKind.DOWN: CursorMove.DOWN,
    KeyKind.HOME: CursorMove.LINE_START,
    KeyKind.END: CursorMove.LINE_END,
}


class Session:
    """
    Everything a running instance owns: the store, the notes editor and the
    current view state. Input is fed through handle_key().
    """

    def __init__(
        self,
        store: TaskStore,
        gateway: Optional[PersistenceGateway] = None,
        clock: Callable[[], pendulum.DateTime] = now_local,
        save_on_quit: bool = True,
        allow_past_reschedule: bool = False,
    ) -> None:
        self.store = store
        self.gateway = gateway
        self.save_on_quit = save_on_quit
        self.allow_past_reschedule = allow_past_reschedule
        self._clock = clock
        self.notes_editor = EditorBuffer(store.notes())
        self.message: Optional[StatusMessage] = None
        self.should_quit = False
        self.quit_pending = False

        today = self.today()
        self.state: ViewState = TaskListState(
            today, clamp_selection(0, len(store.tasks_for(today)))
        )

    @classmethod
    def open(
        cls,
        gateway: PersistenceGateway,
        clock: Callable[[], pendulum.DateTime] = now_local,
        save_on_quit: bool = True,
        allow_past_reschedule: bool = False,
    ) -> "Session":
        """Load the store through the gateway, falling back to an empty one."""
        warning = None
        try:
            store = gateway.load()
        except PersistenceFailure as e:
            store = TaskStore()
            warning = f"{e}. Starting with an empty list."
        session = cls(store, gateway, clock, save_on_quit, allow_past_reschedule)
        if warning is not None:
            session.report(MessageLevel.WARNING, warning)
        return session

    def now(self) -> pendulum.DateTime:
        return self._clock()

    def today(self) -> pendulum.Date:
        return date_from_value(self._clock())

    def report(self, level: MessageLevel, text: str) -> None:
        self.message = StatusMessage(level, text)
        if level == MessageLevel.ERROR:
            logger.error(text)
        elif level == MessageLevel.WARNING:
            logger.warning(text)

    def sync_notes(self) -> None:
        self.store.set_notes(self.notes_editor.text())

    def save(self) -> bool:
        self.sync_notes()
        if self.gateway is None:
            self.report(MessageLevel.WARNING, "No data file to save to")
            return False
        try:
            self.gateway.save(self.store)
        except PersistenceFailure as e:
            self.report(MessageLevel.ERROR, f"Save failed: {e}")
            return False
        self.report(MessageLevel.INFO, "Saved")
        return True

    def request_quit(self) -> None:
        self.sync_notes()
        if not self.store.is_dirty or self.quit_pending:
            self.should_quit = True
            return
        if self.save_on_quit:
            if self.save():
                self.should_quit = True
                return
            self.quit_pending = True
            self.report(
                MessageLevel.ERROR,
                f"{self.message.text if self.message else 'Save failed'}. "
                "Quit again to discard changes.",
            )
            return
        self.quit_pending = True
        self.report(
            MessageLevel.WARNING,
            "Unsaved changes. Quit again to discard them or Ctrl+S to save.",
        )

    def snapshot(self) -> Snapshot:
        today = self.today()
        state = self.state
        selected: Optional[int] = None
        target_date = None
        draft = None
        if isinstance(state, TaskListState):
            date = state.date
            selected = state.selected
        elif isinstance(state, AddEditState):
            date = state.return_date
            selected = state.return_selected
            draft = DraftSnapshot(
                is_new=state.draft.is_new,
                description=state.draft.description.text(),
                start=state.draft.start.text(),
                end=state.draft.end.text(),
                focus=state.draft.focus,
                cursor_col=state.draft.focused_buffer().cursor[1],
                error=state.draft.error,
            )
        elif isinstance(state, OverdueReviewState):
            date = state.return_date
            selected = state.selected
            target_date = state.target_date
        else:
            date = today

        return Snapshot(
            mode=mode_of(state),
            today=today,
            date=date,
            day_tasks=tuple(self.store.tasks_for(date)),
            summary=self.store.summary_for(date),
            overdue=tuple(self.store.overdue(self.now())),
            selected=selected,
            notes_lines=tuple(self.notes_editor.lines),
            notes_cursor=self.notes_editor.cursor,
            draft=draft,
            target_date=target_date,
            is_dirty=self.store.is_dirty,
            message=self.message,
        )


def handle_key(session: Session, key: Key) -> None:
    """Process exactly one input event against the session."""
    state = session.state
    if key.kind == KeyKind.QUIT or (
        key.is_char("q") and isinstance(state, (TaskListState, OverdueReviewState))
    ):
        session.request_quit()
        return

    session.quit_pending = False
    session.message = None
    if key.kind == KeyKind.SAVE:
        session.save()
        return

    if isinstance(state, TaskListState):
        _handle_task_list(session, state, key)
    elif isinstance(state, AddEditState):
        _handle_add_edit(session, state, key)
    elif isinstance(state, NotesState):
        _handle_notes(session, key)
    else:
        _handle_overdue_review(session, state, key)


def _task_list_state(
    session: Session, date: pendulum.Date, selected: Optional[int] = 0
) -> TaskListState:
    count = len(session.store.tasks_for(date))
    return TaskListState(date, clamp_selection(selected, count))


def _selected_task(tasks: list[Task], selected: Optional[int]) -> Optional[Task]:
    if selected is None or not (0 <= selected < len(tasks)):
        return None
    return tasks[selected]


def _handle_task_list(session: Session, state: TaskListState, key: Key) -> None:
    store = session.store
    tasks = store.tasks_for(state.date)
    task = _selected_task(tasks, state.selected)

    if key.is_char("n"):
        session.state = AddEditState(
            FormDraft.for_new_task(state.date), state.date, state.selected
        )
    elif key.is_char("e") or key.kind == KeyKind.ENTER:
        if task is None:
            session.report(MessageLevel.INFO, "No task selected")
            return
        session.state = AddEditState(
            FormDraft.from_task(task), state.date, state.selected
        )
    elif key.is_char(" "):
        if task is not None:
            _apply_to_task(session, task, store.toggle_complete)
        session.state = _task_list_state(session, state.date, state.selected)
    elif key.is_char("d"):
        if task is not None:
            _apply_to_task(session, task, store.delete)
        session.state = _task_list_state(session, state.date, state.selected)
    elif key.is_char("k") or key.kind == KeyKind.UP:
        state.selected = step_selection(state.selected, len(tasks), -1)
    elif key.is_char("j") or key.kind == KeyKind.DOWN:
        state.selected = step_selection(state.selected, len(tasks), 1)
    elif key.is_char("h") or key.kind == KeyKind.LEFT:
        session.state = _task_list_state(session, state.date.subtract(days=1))
    elif key.is_char("l") or key.kind == KeyKind.RIGHT:
        session.state = _task_list_state(session, state.date.add(days=1))
    elif key.is_char("t"):
        session.state = _task_list_state(session, session.today())
    elif key.kind == KeyKind.TAB:
        session.state = NotesState()
    elif key.is_char("o"):
        if not store.overdue(session.now()):
            session.report(MessageLevel.INFO, "No overdue tasks")
            return
        session.state = OverdueReviewState(
            return_date=state.date, target_date=session.today(), selected=0
        )


def _apply_to_task(
    session: Session, task: Task, action: Callable[[TaskId], object]
) -> None:
    if task["id"] is None:
        return
    try:
        action(task["id"])
    except NotFound as e:
        session.report(MessageLevel.WARNING, str(e))


def _handle_add_edit(session: Session, state: AddEditState, key: Key) -> None:
    draft = state.draft
    if key.kind == KeyKind.ESC:
        session.state = _task_list_state(
            session, state.return_date, state.return_selected
        )
    elif key.kind == KeyKind.ENTER:
        try:
            task_id = draft.commit(session.store)
        except ValidationError as e:
            draft.error = str(e)
            session.report(MessageLevel.ERROR, str(e))
            return
        except NotFound as e:
            session.report(MessageLevel.WARNING, str(e))
            session.state = _task_list_state(
                session, state.return_date, state.return_selected
            )
            return
        tasks = session.store.tasks_for(state.return_date)
        selected = next(
            (index for index, task in enumerate(tasks) if task["id"] == task_id),
            state.return_selected,
        )
        session.state = _task_list_state(session, state.return_date, selected)
    elif key.kind == KeyKind.TAB:
        draft.cycle_focus()
    elif key.kind == KeyKind.CHAR and key.char is not None:
        draft.insert_char(key.char)
        draft.error = None
    elif key.kind == KeyKind.BACKSPACE:
        draft.backspace()
        draft.error = None
    elif key.kind == KeyKind.DELETE:
        draft.delete_forward()
        draft.error = None
    elif key.kind in CURSOR_KEYS:
        draft.move_cursor(CURSOR_KEYS[key.kind])


def _handle_notes(session: Session, key: Key) -> None:
    editor = session.notes_editor
    if key.kind == KeyKind.TAB:
        session.sync_notes()
        session.state = _task_list_state(session, session.today())
        return
    if key.kind == KeyKind.CHAR and key.char is not None:
        editor.insert_char(key.char)
    elif key.kind == KeyKind.ENTER:
        editor.insert_newline()
    elif key.kind == KeyKind.BACKSPACE:
        editor.backspace()
    elif key.kind == KeyKind.DELETE:
        editor.delete_forward()
    elif key.kind in CURSOR_KEYS:
        editor.move_cursor(CURSOR_KEYS[key.kind])
        return
    session.sync_notes()


def _handle_overdue_review(
    session: Session, state: OverdueReviewState, key: Key
) -> None:
    store = session.store
    overdue = store.overdue(session.now())
    task = _selected_task(overdue, state.selected)
    today = session.today()

    if key.kind == KeyKind.ESC:
        session.state = _task_list_state(session, state.return_date)
        return
    if key.is_char("k") or key.kind == KeyKind.UP:
        state.selected = step_selection(state.selected, len(overdue), -1)
        return
    if key.is_char("j") or key.kind == KeyKind.DOWN:
        state.selected = step_selection(state.selected, len(overdue), 1)
        return
    if key.is_char("h") or key.kind == KeyKind.LEFT:
        earlier = state.target_date.subtract(days=1)
        if earlier >= today or session.allow_past_reschedule:
            state.target_date = earlier
        return
    if key.is_char("l") or key.kind == KeyKind.RIGHT:
        state.target_date = state.target_date.add(days=1)
        return

    target = None
    if key.is_char("t"):
        target = today
    elif key.is_char("m"):
        target = today.add(days=1)
    elif key.kind == KeyKind.ENTER:
        target = state.target_date

    if task is None or task["id"] is None:
        return
    if target is not None:
        if target >= today and is_before(target, task["end"], session.now()):
            session.report(
                MessageLevel.WARNING,
                f"Would still be overdue on {target.to_date_string()}. "
                "Press m for tomorrow or pick a later date.",
            )
            return
        try:
            reschedule_task(
                store, task["id"], target, today, session.allow_past_reschedule
            )
        except (ValidationError, NotFound) as e:
            session.report(MessageLevel.ERROR, str(e))
            return
        session.report(MessageLevel.INFO, f"Moved to {target.to_date_string()}")
    elif key.is_char(" "):
        _apply_to_task(session, task, store.toggle_complete)
    else:
        return
    state.selected = clamp_selection(
        state.selected, len(store.overdue(session.now()))
    )
