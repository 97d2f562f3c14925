"""Console front end atop ConsoleWindow: maps key codes to Key events and shows rendered frames."""

import curses as cs
from typing import Optional

from console_window import ConsoleWindow, ConsoleWindowOpts
from jinja2 import Environment

from .renderers import Frame, make_env, render, render_switching
from .schema import ErrorScreen
from .state import AppState, Key

KEYMAP = {
    cs.KEY_UP: Key.UP,
    ord("k"): Key.UP,
    cs.KEY_DOWN: Key.DOWN,
    ord("j"): Key.DOWN,
    cs.KEY_ENTER: Key.CONFIRM,
    10: Key.CONFIRM,
    13: Key.CONFIRM,
    ord("q"): Key.QUIT,
    27: Key.QUIT,  # ESC
    ord("Y"): Key.YES,
    ord("y"): Key.YES,
    ord("n"): Key.NO,
    ord("N"): Key.NO,
}

# Every printable key reaches AppState too, so "any key" acknowledges an error.
HANDLED_KEYS = set(KEYMAP) | set(range(32, 127))


def key_from_code(code: int) -> Key:
    return KEYMAP.get(code, Key.OTHER)


class KexecSwitchTui:
    """Drives one AppState until the operator quits. AppState owns the cursor; the window only shows it."""

    def __init__(self, state: AppState, env: Optional[Environment] = None) -> None:
        self.state = state
        self.env = env or make_env()
        self.win = None
        self.redraw = False
        self.dispatched = False
        state.on_dispatch = self.on_dispatch

    def make_window(self) -> ConsoleWindow:
        opts = ConsoleWindowOpts(
            head_line=True,
            head_rows=10,
            body_rows=max(200, len(self.state.entries) + 20),
            keys=HANDLED_KEYS,
            pick_mode=True,
            relax_handled_keys=False,
            min_cols_rows=(40, 10),
        )
        return ConsoleWindow(opts=opts)

    def on_dispatch(self, entry) -> None:
        """Leave curses before kexec runs so sudo can prompt on the plain terminal."""
        ConsoleWindow.stop_curses()
        print(render_switching(entry, self.env), flush=True)
        self.dispatched = True

    def show(self, frame: Frame) -> None:
        win = self.win
        win.set_pick_mode(frame.pick is not None)
        for idx, line in enumerate(frame.header):
            win.add_header(line, attr=cs.A_BOLD if idx == 0 else None)
        for line in frame.body:
            win.add_body(line)
        if frame.pick is not None:
            win.pick_pos = frame.pick
        win.render(redraw=self.redraw)
        self.redraw = False

    def main_loop(self) -> int:
        """Returns the process exit status: 1 after a fatal error, else 0."""
        self.win = self.make_window()
        try:
            while not self.state.finished:
                self.show(render(self.state, self.env))
                key = self.win.prompt(seconds=300)
                self.win.clear()
                if key is None:
                    continue  # timeout, resize or window-only navigation
                self.state.handle(key_from_code(key))
                if self.dispatched:
                    # Only reached when load or execute failed.
                    self.win.scr = ConsoleWindow.start_curses()
                    self.dispatched = False
                    self.redraw = True
        finally:
            ConsoleWindow.stop_curses()
        screen = self.state.screen
        return 1 if isinstance(screen, ErrorScreen) and screen.fatal else 0


def run(state: AppState) -> int:
    return KexecSwitchTui(state).main_loop()
