"""
Kernel inventory and screen schema.

Strongly typed contract between the scanner, the state machine and the renderer.
The scanner produces an Inventory; AppState owns it and exposes exactly one
screen model at a time; renderers consume both.
"""

from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field


# --- Inventory (built once per run, replaced wholesale on rescan) ---


class KernelEntry(BaseModel):
    """A kernel image paired with exactly one initrd image."""

    version: str  # suffix after "vmlinuz-", e.g. "6.1.0-13-amd64"
    kernel_path: str
    initrd_path: str

    model_config = {"frozen": True}


class Inventory(BaseModel):
    """Output of the inspectors: the ordered, deduplicated entry list plus context."""

    boot_dir: str
    entries: Tuple[KernelEntry, ...] = ()
    running_release: Optional[str] = None  # uname -r
    skipped: List[str] = Field(default_factory=list)  # kernel versions with no initrd

    model_config = {"frozen": True}


# --- Screens (exactly one active; recreated on every transition) ---


class SelectionScreen(BaseModel):
    kind: Literal["selection"] = "selection"

    model_config = {"frozen": True}


class ConfirmationScreen(BaseModel):
    kind: Literal["confirmation"] = "confirmation"
    entry: KernelEntry

    model_config = {"frozen": True}


class ErrorScreen(BaseModel):
    """Error with the underlying diagnostic text. return_to=None means fatal: acknowledging quits."""

    kind: Literal["error"] = "error"
    message: str
    return_to: Optional[Literal["selection"]] = "selection"

    model_config = {"frozen": True}

    @property
    def fatal(self) -> bool:
        return self.return_to is None


Screen = Union[SelectionScreen, ConfirmationScreen, ErrorScreen]
