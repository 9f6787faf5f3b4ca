"""Queries and conversions over the state held by an input engine."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from types import MappingProxyType

from .input_engine import ActionId, InputEngine
from .input_state import ButtonState, MouseState, TouchState
from .input_types import KeyCode, TouchPhase

_MOUSE_TOUCH_ID = 0xC0FFEE


class InputHandler:
    """Game-facing view of an InputEngine."""

    def __init__(self, engine: InputEngine) -> None:
        self._engine = engine

    def add_action_binding_key(self, action_id: ActionId, key_code: KeyCode) -> None:
        self._engine.add_action_binding_key(action_id, key_code)

    def remove_action_binding_key(self, action_id: ActionId, key_code: KeyCode) -> None:
        self._engine.remove_action_binding_key(action_id, key_code)

    def _action_keys(self, action_id: ActionId) -> list[KeyCode]:
        action = self._engine.actions.get(action_id)
        return list(action.key_bindings) if action is not None else []

    def is_action_pressed(self, action_id: ActionId) -> bool:
        return any(self.is_key_pressed(key) for key in self._action_keys(action_id))

    def is_action_just_pressed(self, action_id: ActionId) -> bool:
        return any(self.is_key_just_pressed(key) for key in self._action_keys(action_id))

    def is_key_pressed(self, key: KeyCode) -> bool:
        return self.get_key_state(key).is_pressed

    def is_key_just_pressed(self, key: KeyCode) -> bool:
        return self.get_key_state(key).is_just_pressed()

    def get_key_state(self, keycode: KeyCode) -> ButtonState:
        """Return a snapshot of the key's state, starting to track it if needed."""
        state = self._engine.keys.setdefault(keycode, ButtonState())
        return copy.copy(state)

    def mouse(self) -> MouseState:
        """Return a snapshot of the mouse state."""
        return copy.deepcopy(self._engine.mouse)

    def touches(self) -> Mapping[int, TouchState]:
        return MappingProxyType(self._engine.touches)

    def touches_to_mouse(self) -> None:
        """Reflect the most recent touch as a mouse click.

        One touch drives the left button, two the right, more the middle.
        """
        touches = self._engine.touches
        if not touches:
            return
        last_touch = next(reversed(touches.values()))

        mouse = self._engine.mouse
        count = len(touches)
        if count == 1:
            button = mouse.left
        elif count == 2:
            button = mouse.right
        else:
            button = mouse.middle

        mouse.translation = copy.copy(last_touch.translation)
        if last_touch.phase is TouchPhase.STARTED:
            button.was_pressed, button.is_pressed = False, True
        elif last_touch.phase is TouchPhase.MOVED:
            button.was_pressed, button.is_pressed = True, True
        else:
            button.was_pressed, button.is_pressed = True, False

    def mouse_to_touch(self) -> None:
        """Record the left mouse button as a touch."""
        left = self._engine.mouse.left
        match (left.was_pressed, left.is_pressed):
            case (False, False):
                return
            case (False, True):
                previous, phase = TouchPhase.CANCELLED, TouchPhase.STARTED
            case (True, True):
                previous, phase = TouchPhase.MOVED, TouchPhase.MOVED
            case _:
                previous, phase = TouchPhase.MOVED, TouchPhase.ENDED

        self._engine.touches[_MOUSE_TOUCH_ID] = TouchState(
            translation=copy.copy(self._engine.mouse.translation),
            previous=previous,
            phase=phase,
        )