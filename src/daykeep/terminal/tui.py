# SPDX-License-Identifier: MIT

import curses
import logging

from daykeep.service.session import Session, handle_key
from daykeep.terminal.keys import translate_key
from daykeep.view.screen import draw, init_colors

logger = logging.getLogger(__name__)

ESC_DELAY_MS = 25


def run_tui(session: Session) -> None:
    curses.wrapper(_main, session)


def _main(stdscr: curses.window, session: Session) -> None:
    # raw mode so Ctrl+S / Ctrl+Q reach us instead of flow control
    curses.raw()
    curses.set_escdelay(ESC_DELAY_MS)
    stdscr.keypad(True)
    init_colors()
    logger.info("full-screen session started")

    while not session.should_quit:
        draw(stdscr, session.snapshot())
        try:
            raw = stdscr.get_wch()
        except curses.error:
            continue
        key = translate_key(raw)
        if key is None:
            continue
        handle_key(session, key)

    logger.info("full-screen session ended")
