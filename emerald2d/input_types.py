"""Basic input vocabulary: touch phases, mouse buttons and key codes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .transform import Translation


class TouchPhase(Enum):
    """Phase of a touch on a touch screen."""

    STARTED = auto()
    MOVED = auto()
    ENDED = auto()
    CANCELLED = auto()


class MouseButton(Enum):
    RIGHT = auto()
    LEFT = auto()
    MIDDLE = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class Touch:
    id: int
    x: float
    y: float


class KeyCode(Enum):
    SPACE = auto()
    APOSTROPHE = auto()
    COMMA = auto()
    MINUS = auto()
    PERIOD = auto()
    SLASH = auto()
    KEY0 = auto()
    KEY1 = auto()
    KEY2 = auto()
    KEY3 = auto()
    KEY4 = auto()
    KEY5 = auto()
    KEY6 = auto()
    KEY7 = auto()
    KEY8 = auto()
    KEY9 = auto()
    SEMICOLON = auto()
    EQUAL = auto()
    A = auto()
    B = auto()
    C = auto()
    D = auto()
    E = auto()
    F = auto()
    G = auto()
    H = auto()
    I = auto()  # noqa: E741
    J = auto()
    K = auto()
    L = auto()
    M = auto()
    N = auto()
    O = auto()  # noqa: E741
    P = auto()
    Q = auto()
    R = auto()
    S = auto()
    T = auto()
    U = auto()
    V = auto()
    W = auto()
    X = auto()
    Y = auto()
    Z = auto()
    LEFT_BRACKET = auto()
    BACKSLASH = auto()
    RIGHT_BRACKET = auto()
    GRAVE_ACCENT = auto()
    ESCAPE = auto()
    ENTER = auto()
    TAB = auto()
    BACKSPACE = auto()
    INSERT = auto()
    DELETE = auto()
    RIGHT = auto()
    LEFT = auto()
    DOWN = auto()
    UP = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    HOME = auto()
    END = auto()
    CAPS_LOCK = auto()
    SCROLL_LOCK = auto()
    NUM_LOCK = auto()
    PAUSE = auto()
    F1 = auto()
    F2 = auto()
    F3 = auto()
    F4 = auto()
    F5 = auto()
    F6 = auto()
    F7 = auto()
    F8 = auto()
    F9 = auto()
    F10 = auto()
    F11 = auto()
    F12 = auto()
    F13 = auto()
    F14 = auto()
    F15 = auto()
    F16 = auto()
    F17 = auto()
    F18 = auto()
    F19 = auto()
    F20 = auto()
    F21 = auto()
    F22 = auto()
    F23 = auto()
    F24 = auto()
    KP0 = auto()
    KP1 = auto()
    KP2 = auto()
    KP3 = auto()
    KP4 = auto()
    KP5 = auto()
    KP6 = auto()
    KP7 = auto()
    KP8 = auto()
    KP9 = auto()
    KP_DECIMAL = auto()
    KP_DIVIDE = auto()
    KP_MULTIPLY = auto()
    KP_SUBTRACT = auto()
    KP_ADD = auto()
    KP_ENTER = auto()
    KP_EQUAL = auto()
    LEFT_SHIFT = auto()
    LEFT_CONTROL = auto()
    LEFT_ALT = auto()
    RIGHT_SHIFT = auto()
    RIGHT_CONTROL = auto()
    RIGHT_ALT = auto()
    UNKNOWN = auto()


def screen_translation_to_world_translation(
    screen_size: tuple[int, int],
    screen_translation: Translation,
    camera_translation: Translation | None = None,
) -> Translation:
    """Return the world position of a point on a screen of the given size.

    Screen coordinates start at the top-left corner with y growing downwards;
    world coordinates are centred on the camera with y growing upwards.
    Camera zoom is not taken into account.
    """
    camera = camera_translation if camera_translation is not None else Translation()
    width, height = float(screen_size[0]), float(screen_size[1])
    normalized = Translation(
        screen_translation.x - width / 2.0,
        height - screen_translation.y - height / 2.0,
    )
    return camera + normalized