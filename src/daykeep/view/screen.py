# SPDX-License-Identifier: MIT

import curses

from daykeep.model.task import Task
from daykeep.service.form import FieldFocus
from daykeep.service.view_state import MessageLevel, Snapshot, ViewMode
from daykeep.time import date_to_display_str, date_to_str, time_to_str
from daykeep.view.views.task import summary_line, task_state

SIDEBAR_WIDTH = 35
MIN_WIDTH = 40
MIN_HEIGHT = 10

DEFAULT_PAIR = 1
START_PAIR = 2
END_PAIR = 3
OVERDUE_PAIR = 4
DONE_PAIR = 5
WARNING_PAIR = 6
NOTES_PAIR = 7

HELP_TEXT = {
    ViewMode.TASK_LIST: (
        "n new  e edit  space done  d delete  h/l day  t today  "
        "o overdue  tab notes  ^S save  q quit"
    ),
    ViewMode.ADD_EDIT: "tab next field  enter save  esc cancel",
    ViewMode.NOTES: "type to edit  tab tasks  ^S save  ^Q quit",
    ViewMode.OVERDUE_REVIEW: (
        "j/k select  t today  m tomorrow  h/l pick date  enter move  "
        "space done  esc back"
    ),
}


def init_colors() -> None:
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(DEFAULT_PAIR, -1, -1)
    curses.init_pair(START_PAIR, curses.COLOR_CYAN, -1)
    curses.init_pair(END_PAIR, curses.COLOR_MAGENTA, -1)
    curses.init_pair(OVERDUE_PAIR, curses.COLOR_RED, -1)
    curses.init_pair(DONE_PAIR, curses.COLOR_GREEN, -1)
    curses.init_pair(WARNING_PAIR, curses.COLOR_YELLOW, -1)
    curses.init_pair(NOTES_PAIR, curses.COLOR_BLUE, -1)


def _put(win: curses.window, y: int, x: int, text: str, attr: int = 0) -> None:
    height, width = win.getmaxyx()
    if y < 0 or y >= height or x < 0 or x >= width:
        return
    # The bottom-right cell cannot be written without moving the cursor off screen
    limit = width - x - (1 if y == height - 1 else 0)
    if limit <= 0:
        return
    win.addnstr(y, x, text, limit, attr)


def draw(stdscr: curses.window, snapshot: Snapshot) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    if width < MIN_WIDTH or height < MIN_HEIGHT:
        _put(stdscr, 0, 0, f"daykeep needs at least {MIN_WIDTH}x{MIN_HEIGHT}")
        stdscr.refresh()
        return

    _draw_header(stdscr, snapshot, width)

    body_top = 2
    body_height = height - body_top - 3
    show_sidebar = width >= MIN_WIDTH + SIDEBAR_WIDTH
    main_width = width - SIDEBAR_WIDTH - 1 if show_sidebar else width

    cursor_pos = None
    if snapshot.mode == ViewMode.NOTES:
        cursor_pos = _draw_notes(stdscr, snapshot, body_top, body_height, main_width)
    elif snapshot.mode == ViewMode.OVERDUE_REVIEW:
        _draw_overdue_review(stdscr, snapshot, body_top, body_height, main_width)
    else:
        _draw_task_table(stdscr, snapshot, body_top, body_height, main_width)

    if show_sidebar:
        _draw_overdue_sidebar(stdscr, snapshot, body_top, main_width + 1, body_height)

    footer_top = height - 3
    if snapshot.mode == ViewMode.ADD_EDIT:
        cursor_pos = _draw_form(stdscr, snapshot, footer_top, width)
    else:
        _put(stdscr, footer_top, 1, HELP_TEXT[snapshot.mode], curses.A_DIM)
    _draw_message(stdscr, snapshot, height - 1)

    if cursor_pos is not None:
        curses.curs_set(1)
        stdscr.move(*cursor_pos)
    else:
        curses.curs_set(0)
    stdscr.refresh()


def _draw_header(stdscr: curses.window, snapshot: Snapshot, width: int) -> None:
    if snapshot.mode == ViewMode.NOTES:
        title = "Notes"
        attr = curses.color_pair(NOTES_PAIR) | curses.A_BOLD
    else:
        title = date_to_display_str(snapshot.date)
        if snapshot.date == snapshot.today:
            title += " (Today)"
        attr = curses.color_pair(START_PAIR) | curses.A_BOLD
    dirty = "  [modified]" if snapshot.is_dirty else ""
    _put(stdscr, 0, 1, f"daykeep ▸ {title}", attr)
    if snapshot.mode != ViewMode.NOTES:
        stats = summary_line(snapshot.summary) + dirty
    else:
        stats = dirty.strip()
    _put(stdscr, 0, max(1, width - len(stats) - 2), stats, curses.A_DIM)
    _put(stdscr, 1, 0, "─" * width, curses.A_DIM)


def _task_attr(task: Task, is_selected: bool) -> int:
    attr = curses.A_REVERSE if is_selected else 0
    if task["completed"]:
        return attr | curses.A_DIM
    return attr


def _draw_task_table(
    stdscr: curses.window, snapshot: Snapshot, top: int, height: int, width: int
) -> None:
    _put(stdscr, top, 1, "    Start  End    Description", curses.A_BOLD)
    if not snapshot.day_tasks:
        _put(stdscr, top + 2, 1, "No tasks for this day. Press n to add one.", curses.A_DIM)
        return
    visible = height - 1
    offset = 0
    if snapshot.selected is not None and snapshot.selected >= visible:
        offset = snapshot.selected - visible + 1
    for row, task in enumerate(snapshot.day_tasks[offset : offset + visible]):
        index = row + offset
        is_selected = index == snapshot.selected
        attr = _task_attr(task, is_selected)
        y = top + 1 + row
        checkbox = "●" if task["completed"] else "○"
        if is_selected:
            _put(stdscr, y, 0, " " * width, attr)
        _put(
            stdscr,
            y,
            1,
            f" {checkbox} ",
            attr | curses.color_pair(DONE_PAIR if task["completed"] else DEFAULT_PAIR),
        )
        _put(stdscr, y, 5, time_to_str(task["start"]), attr | curses.color_pair(START_PAIR))
        _put(stdscr, y, 12, time_to_str(task["end"]), attr | curses.color_pair(END_PAIR))
        _put(stdscr, y, 19, task["description"][: max(0, width - 20)], attr)


def _draw_notes(
    stdscr: curses.window, snapshot: Snapshot, top: int, height: int, width: int
) -> tuple[int, int]:
    row, col = snapshot.notes_cursor
    text_width = max(1, width - 2)
    first_line = max(0, row - height + 1)
    first_col = max(0, col - text_width + 1)
    for offset, line in enumerate(snapshot.notes_lines[first_line : first_line + height]):
        _put(stdscr, top + offset, 1, line[first_col : first_col + text_width])
    return (top + row - first_line, 1 + col - first_col)


def _draw_overdue_review(
    stdscr: curses.window, snapshot: Snapshot, top: int, height: int, width: int
) -> None:
    target = snapshot.target_date
    target_text = date_to_str(target) if target is not None else "-"
    _put(stdscr, top, 1, f"Overdue tasks  ▸ move to {target_text}", curses.A_BOLD)
    if not snapshot.overdue:
        _put(stdscr, top + 2, 1, "Nothing overdue. Press esc to go back.", curses.A_DIM)
        return
    for row, task in enumerate(snapshot.overdue[: height - 1]):
        is_selected = row == snapshot.selected
        attr = curses.A_REVERSE if is_selected else 0
        y = top + 1 + row
        if is_selected:
            _put(stdscr, y, 0, " " * width, attr)
        _put(stdscr, y, 1, date_to_str(task["date"]), attr | curses.color_pair(OVERDUE_PAIR))
        _put(stdscr, y, 13, time_to_str(task["end"]), attr | curses.color_pair(END_PAIR))
        _put(stdscr, y, 20, task["description"][: max(0, width - 21)], attr)


def _draw_overdue_sidebar(
    stdscr: curses.window, snapshot: Snapshot, top: int, left: int, height: int
) -> None:
    count = len(snapshot.overdue)
    for y in range(top, top + height):
        _put(stdscr, y, left - 1, "│", curses.A_DIM)
    if count == 0:
        _put(stdscr, top, left + 1, "✓ All caught up", curses.color_pair(DONE_PAIR))
        return
    _put(
        stdscr,
        top,
        left + 1,
        f"⚠ Overdue ({count})  o to review",
        curses.color_pair(OVERDUE_PAIR) | curses.A_BOLD,
    )
    for row, task in enumerate(snapshot.overdue[: height - 2]):
        preview = task["description"]
        if len(preview) > 20:
            preview = preview[:19] + "…"
        line = f"{task['date'].format('MMM DD')} {task_state(task)}{preview}"
        _put(stdscr, top + 2 + row, left + 1, line, curses.color_pair(OVERDUE_PAIR))


def _draw_form(
    stdscr: curses.window, snapshot: Snapshot, top: int, width: int
) -> tuple[int, int]:
    draft = snapshot.draft
    if draft is None:
        return (top, 1)
    mode_text = "ADD" if draft.is_new else "EDIT"
    mode_attr = curses.color_pair(DONE_PAIR if draft.is_new else WARNING_PAIR)
    _put(stdscr, top, 1, mode_text, mode_attr | curses.A_BOLD)

    fields = [
        (FieldFocus.DESCRIPTION, "Task", draft.description),
        (FieldFocus.START, "Start", draft.start),
        (FieldFocus.END, "End", draft.end),
    ]
    x = 1 + len(mode_text) + 2
    cursor = (top + 1, x)
    y = top + 1
    for focus, label, value in fields:
        is_focused = focus == draft.focus
        label_attr = curses.A_BOLD if is_focused else curses.A_DIM
        _put(stdscr, y, x, f"{label}: ", label_attr)
        value_x = x + len(label) + 2
        shown = value if value else ("HH:MM" if focus != FieldFocus.DESCRIPTION else "")
        _put(stdscr, y, value_x, shown, 0 if value else curses.A_DIM)
        if is_focused:
            cursor = (y, min(width - 2, value_x + draft.cursor_col))
        x = value_x + max(len(shown), 5) + 3
    if draft.error:
        _put(stdscr, top, 1 + len(mode_text) + 2, draft.error, curses.color_pair(OVERDUE_PAIR))
    return cursor


def _draw_message(stdscr: curses.window, snapshot: Snapshot, y: int) -> None:
    message = snapshot.message
    if message is None:
        return
    if message.level == MessageLevel.ERROR:
        attr = curses.color_pair(OVERDUE_PAIR) | curses.A_BOLD
    elif message.level == MessageLevel.WARNING:
        attr = curses.color_pair(WARNING_PAIR)
    else:
        attr = curses.A_DIM
    _put(stdscr, y, 1, message.text, attr)
