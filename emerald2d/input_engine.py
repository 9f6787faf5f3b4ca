"""Raw input state: keys, mouse, touches and named actions."""

from __future__ import annotations

from dataclasses import dataclass, field

from .input_state import ButtonState, MouseState, TouchState
from .input_types import KeyCode, MouseButton, TouchPhase
from .transform import Translation

ActionId = str


def _build_virtual_keycode_table() -> dict[str, KeyCode]:
    table: dict[str, KeyCode] = {}
    for letter in "ABCDEFGHIJKLMNOPQRSTUVWXYZ":
        table[letter] = KeyCode[letter]
    for digit in range(10):
        table[f"Key{digit}"] = KeyCode[f"KEY{digit}"]
        table[f"Numpad{digit}"] = KeyCode[f"KP{digit}"]
    for number in range(1, 25):
        table[f"F{number}"] = KeyCode[f"F{number}"]
    table.update(
        {
            "Down": KeyCode.DOWN,
            "Up": KeyCode.UP,
            "Left": KeyCode.LEFT,
            "Right": KeyCode.RIGHT,
            "Space": KeyCode.SPACE,
            "Escape": KeyCode.ESCAPE,
            "Delete": KeyCode.DELETE,
            "Apostrophe": KeyCode.APOSTROPHE,
            "Comma": KeyCode.COMMA,
            "Minus": KeyCode.MINUS,
            "Period": KeyCode.PERIOD,
            "Slash": KeyCode.SLASH,
            "Semicolon": KeyCode.SEMICOLON,
            "Equals": KeyCode.EQUAL,
            "LBracket": KeyCode.LEFT_BRACKET,
            "Backslash": KeyCode.BACKSLASH,
            "RBracket": KeyCode.RIGHT_BRACKET,
            "Grave": KeyCode.GRAVE_ACCENT,
            "NumpadEnter": KeyCode.KP_ENTER,
            "Return": KeyCode.ENTER,
            "Tab": KeyCode.TAB,
            "Back": KeyCode.BACKSPACE,
            "Insert": KeyCode.INSERT,
            "PageUp": KeyCode.PAGE_UP,
            "PageDown": KeyCode.PAGE_DOWN,
            "Home": KeyCode.HOME,
            "End": KeyCode.END,
            "Capital": KeyCode.CAPS_LOCK,
            "Scroll": KeyCode.SCROLL_LOCK,
            "Numlock": KeyCode.NUM_LOCK,
            "Pause": KeyCode.PAUSE,
            "NumpadDecimal": KeyCode.KP_DECIMAL,
            "NumpadDivide": KeyCode.KP_DIVIDE,
            "NumpadMultiply": KeyCode.KP_MULTIPLY,
            "NumpadSubtract": KeyCode.KP_SUBTRACT,
            "NumpadAdd": KeyCode.KP_ADD,
            "NumpadEquals": KeyCode.KP_EQUAL,
            "LShift": KeyCode.LEFT_SHIFT,
            "LControl": KeyCode.LEFT_CONTROL,
            "LAlt": KeyCode.LEFT_ALT,
            "RShift": KeyCode.RIGHT_SHIFT,
            "RControl": KeyCode.RIGHT_CONTROL,
            "RAlt": KeyCode.RIGHT_ALT,
        }
    )
    return table


_VIRTUAL_KEYCODES = _build_virtual_keycode_table()


def virtual_keycode_to_keycode(virtual_keycode: str) -> KeyCode:
    """Map a windowing-system key name to a KeyCode; unknown names give UNKNOWN."""
    return _VIRTUAL_KEYCODES.get(virtual_keycode, KeyCode.UNKNOWN)


@dataclass
class Action:
    """A named action and the keys bound to it."""

    key_bindings: set[KeyCode] = field(default_factory=set)


class InputEngine:
    """Holds the input state that window events update each frame."""

    def __init__(self) -> None:
        self.keys: dict[KeyCode, ButtonState] = {}
        self.mouse = MouseState()
        self.touches: dict[int, TouchState] = {}
        self.touches_to_mouse = False
        self.mouse_to_touch = False
        self.actions: dict[ActionId, Action] = {}

    def handle_virtual_keycode(self, virtual_keycode: str, pressed: bool) -> None:
        self._set_key_pressed(virtual_keycode_to_keycode(virtual_keycode), pressed)

    def handle_cursor_move(self, x: float, y: float) -> None:
        self.mouse.translation = Translation(float(x), float(y))

    def handle_mouse_input(self, button: MouseButton, pressed: bool) -> None:
        self._set_mouse_pressed(button, pressed)

    def _rollover_touches(self) -> None:
        self.touches = {
            touch_id: touch
            for touch_id, touch in self.touches.items()
            if not touch.is_outdated()
        }
        for touch in self.touches.values():
            touch.rollover()

    def update_and_rollover(self) -> None:
        """Move the current state of every key, touch and button into the past."""
        for state in self.keys.values():
            state.rollover()
        self._rollover_touches()
        self.mouse.rollover()

    def add_action_binding_key(self, action_id: ActionId, key_code: KeyCode) -> None:
        self.actions.setdefault(action_id, Action()).key_bindings.add(key_code)

    def remove_action_binding_key(self, action_id: ActionId, key_code: KeyCode) -> None:
        action = self.actions.get(action_id)
        if action is not None:
            action.key_bindings.discard(key_code)

    def set_key_down(self, keycode: KeyCode, repeat: bool = False) -> None:
        self._set_key_pressed(keycode, True)

    def set_key_up(self, keycode: KeyCode) -> None:
        self._set_key_pressed(keycode, False)

    def _set_key_pressed(self, keycode: KeyCode, is_pressed: bool) -> None:
        self.keys.setdefault(keycode, ButtonState()).is_pressed = is_pressed

    def set_mouse_translation(self, x: float, y: float) -> None:
        self.mouse.translation = Translation(float(x), float(y))

    def set_mouse_down(self, button: MouseButton, x: float, y: float) -> None:
        self.set_mouse_translation(x, y)
        self._set_mouse_pressed(button, True)

    def set_mouse_up(self, button: MouseButton, x: float, y: float) -> None:
        self.set_mouse_translation(x, y)
        self._set_mouse_pressed(button, False)

    def _set_mouse_pressed(self, button: MouseButton, is_pressed: bool) -> None:
        states = {
            MouseButton.RIGHT: self.mouse.right,
            MouseButton.LEFT: self.mouse.left,
            MouseButton.MIDDLE: self.mouse.middle,
        }
        state = states.get(button)
        if state is not None:
            state.is_pressed = is_pressed

    def touch_event(self, phase: TouchPhase, touch_id: int, x: float, y: float) -> None:
        touch = self.touches.setdefault(touch_id, TouchState())
        touch.translation = Translation(float(x), float(y))
        touch.phase = phase