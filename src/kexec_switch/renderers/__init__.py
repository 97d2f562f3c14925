"""
Renderers turn AppState's current screen (or an Inventory) into text.
The console window shows the header fixed and scrolls the body; --list prints.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from jinja2 import DictLoader, Environment, StrictUndefined

from ..schema import ConfirmationScreen, ErrorScreen, SelectionScreen
from .templates import TEMPLATES


@dataclass
class Frame:
    header: List[str] = field(default_factory=list)
    body: List[str] = field(default_factory=list)
    pick: Optional[int] = None  # body row under the cursor; None outside Selection


def make_env() -> Environment:
    return Environment(
        loader=DictLoader(TEMPLATES),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )


def _lines(env: Environment, name: str, **context) -> List[str]:
    return env.get_template(name).render(**context).splitlines()


def render(state, env: Optional[Environment] = None) -> Frame:
    """Render the active screen of an AppState."""
    env = env or make_env()
    screen = state.screen
    if isinstance(screen, SelectionScreen):
        boot_dir = state.inventory.boot_dir if state.inventory else ""
        return Frame(
            header=_lines(env, "selection.head", boot_dir=boot_dir),
            body=_lines(env, "selection.body", entries=state.entries, running=state.running_release),
            pick=state.cursor,
        )
    if isinstance(screen, ConfirmationScreen):
        return Frame(
            header=_lines(env, "confirmation.head", entry=screen.entry),
            body=_lines(env, "confirmation.body", entry=screen.entry),
        )
    if isinstance(screen, ErrorScreen):
        return Frame(
            header=_lines(env, "error.head", fatal=screen.fatal),
            body=_lines(env, "error.body", message=screen.message),
        )
    raise TypeError(f"Unknown screen: {screen!r}")


def render_switching(entry, env: Optional[Environment] = None) -> str:
    env = env or make_env()
    return env.get_template("switching.txt").render(entry=entry)
