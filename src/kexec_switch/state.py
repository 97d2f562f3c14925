"""
Interactive state machine.

AppState is owned by the single control loop; nothing else mutates it.
It consumes discrete Key events and returns the screen to render next.

    Selection     UP/DOWN        -> Selection (cursor clamped to the list)
    Selection     CONFIRM        -> Confirmation(entry under cursor)
    Selection     QUIT           -> finished
    Confirmation  CONFIRM/YES    -> load, then execute; any failure -> Error
    Confirmation  QUIT/NO        -> Selection (cursor unchanged)
    Error         any key        -> Selection, or finished when the error is fatal

The only call to PrivilegedExecutor.execute is in _accept(), which only
runs for CONFIRM/YES while a ConfirmationScreen is active.
"""

import os
import sys
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from .errors import ExecError, NoKernelsFound, ScanError
from .inspectors import run_all
from .inspectors.running import DEFAULT_CMDLINE_FILE, read_cmdline
from .privileged import PrivilegedExecutor
from .schema import (
    ConfirmationScreen,
    ErrorScreen,
    Inventory,
    KernelEntry,
    Screen,
    SelectionScreen,
)

_DEBUG = bool(os.environ.get("KEXEC_SWITCH_DEBUG", ""))


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[kexec-switch] state: {msg}", file=sys.stderr)


class Key(str, Enum):
    UP = "up"
    DOWN = "down"
    CONFIRM = "confirm"  # Enter
    QUIT = "quit"  # q / Esc
    YES = "yes"  # Y
    NO = "no"  # n
    OTHER = "other"


class AppState:
    def __init__(
        self,
        privileged: PrivilegedExecutor,
        inventory: Optional[Inventory] = None,
        error: Optional[ScanError] = None,
        cmdline_reader: Callable[[], str] = read_cmdline,
        on_dispatch: Optional[Callable[[KernelEntry], None]] = None,
    ) -> None:
        self.privileged = privileged
        self.cmdline_reader = cmdline_reader
        self.on_dispatch = on_dispatch
        self.inventory = inventory
        self.entries: Tuple[KernelEntry, ...] = ()
        self.cursor = 0
        self.finished = False
        self.last_error: Optional[Exception] = None
        self.screen: Screen = SelectionScreen()
        if error is not None:
            self._fail(error, fatal=True)
        elif inventory is not None:
            self.replace_entries(inventory.entries)
        else:
            self._fail(NoKernelsFound("(no inventory)"), fatal=True)

    @classmethod
    def from_boot_dir(
        cls,
        boot_dir: Path,
        privileged: PrivilegedExecutor,
        cmdline_file: Path = Path(DEFAULT_CMDLINE_FILE),
        on_dispatch: Optional[Callable[[KernelEntry], None]] = None,
    ) -> "AppState":
        """Scan once and start in Selection, or in a fatal Error screen if the scan failed."""
        kwargs = dict(
            privileged=privileged,
            cmdline_reader=lambda: read_cmdline(cmdline_file),
            on_dispatch=on_dispatch,
        )
        try:
            inventory = run_all(boot_dir, executor=privileged.executor)
        except ScanError as e:
            return cls(error=e, **kwargs)
        return cls(inventory=inventory, **kwargs)

    # --- accessors ---

    @property
    def selected(self) -> Optional[KernelEntry]:
        if not self.entries:
            return None
        return self.entries[self.cursor]

    @property
    def running_release(self) -> Optional[str]:
        return self.inventory.running_release if self.inventory else None

    # --- mutation ---

    def replace_entries(self, entries: Sequence[KernelEntry]) -> None:
        """Swap in a fresh entry list (rescan). Never edits the old one in place."""
        self.entries = tuple(entries)
        self.cursor = 0
        if not self.entries:
            boot_dir = self.inventory.boot_dir if self.inventory else "(unknown)"
            self._fail(NoKernelsFound(boot_dir), fatal=True)
        else:
            self.screen = SelectionScreen()

    def handle(self, key: Key) -> Screen:
        screen = self.screen
        if self.finished:
            return screen
        if isinstance(screen, SelectionScreen):
            self._on_selection(key)
        elif isinstance(screen, ConfirmationScreen):
            self._on_confirmation(key, screen)
        elif isinstance(screen, ErrorScreen):
            if screen.fatal:
                self.finished = True
            else:
                self.screen = SelectionScreen()
        return self.screen

    def _on_selection(self, key: Key) -> None:
        if key == Key.UP:
            self.cursor = max(self.cursor - 1, 0)
        elif key == Key.DOWN:
            self.cursor = min(self.cursor + 1, len(self.entries) - 1)
        elif key == Key.CONFIRM:
            entry = self.selected
            if entry is not None:
                self.screen = ConfirmationScreen(entry=entry)
        elif key == Key.QUIT:
            self.finished = True

    def _on_confirmation(self, key: Key, screen: ConfirmationScreen) -> None:
        if key in (Key.CONFIRM, Key.YES):
            self._accept(screen.entry)
        elif key in (Key.QUIT, Key.NO):
            self.screen = SelectionScreen()

    def _accept(self, entry: KernelEntry) -> None:
        _debug(f"accepted {entry.version}")
        try:
            command_line = self.cmdline_reader()
            if self.on_dispatch is not None:
                self.on_dispatch(entry)
            token = self.privileged.load(entry, command_line)
            self.privileged.execute(token)
        except ExecError as e:
            self._fail(e, fatal=False)

    def _fail(self, error: Exception, fatal: bool) -> None:
        _debug(f"error ({'fatal' if fatal else 'recoverable'}): {error}")
        self.last_error = error
        self.screen = ErrorScreen(
            message=str(error),
            return_to=None if fatal else "selection",
        )
