"""State of buttons, the mouse and touches across frames."""

from __future__ import annotations

from dataclasses import dataclass, field

from .input_types import TouchPhase
from .transform import Translation


@dataclass
class ButtonState:
    """Whether a button is pressed now and whether it was on the last frame."""

    is_pressed: bool = False
    was_pressed: bool = False

    def rollover(self) -> None:
        self.was_pressed = self.is_pressed

    def is_just_pressed(self) -> bool:
        return not self.was_pressed and self.is_pressed


@dataclass
class MouseState:
    """State of the mouse over the last few frames."""

    translation: Translation = field(default_factory=Translation)
    left: ButtonState = field(default_factory=ButtonState)
    middle: ButtonState = field(default_factory=ButtonState)
    right: ButtonState = field(default_factory=ButtonState)

    def rollover(self) -> None:
        self.left.rollover()
        self.middle.rollover()
        self.right.rollover()


_ACTIVE_PHASES = frozenset({TouchPhase.STARTED, TouchPhase.MOVED})


@dataclass
class TouchState:
    """Position and phase of a single touch, with its previous phase."""

    translation: Translation = field(default_factory=Translation)
    previous: TouchPhase = TouchPhase.CANCELLED
    phase: TouchPhase = TouchPhase.CANCELLED

    def was_pressed(self) -> bool:
        return self.previous in _ACTIVE_PHASES

    def is_pressed(self) -> bool:
        return self.phase in _ACTIVE_PHASES

    def is_just_pressed(self) -> bool:
        return not self.was_pressed() and self.is_pressed()

    def is_just_released(self) -> bool:
        return self.was_pressed() and not self.is_pressed()

    def is_outdated(self) -> bool:
        return not self.was_pressed() and not self.is_pressed()

    def rollover(self) -> None:
        self.previous = self.phase