"""Clickable, touchable on-screen buttons and the system that updates them."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping

from .input_state import MouseState, TouchState
from .input_types import screen_translation_to_world_translation
from .transform import Transform, Translation

TextureSizeLookup = Callable[[Hashable], "tuple[float, float] | None"]


class UIButton:
    """A button drawn with one texture while pressed and another while not."""

    def __init__(self, pressed_texture: Hashable, unpressed_texture: Hashable) -> None:
        self.pressed_texture = pressed_texture
        self.unpressed_texture = unpressed_texture
        # Custom bounding boxes, overriding the texture's size when set.
        self.custom_pressed_bounding_box = None
        self.custom_unpressed_bounding_box = None
        self._is_pressed = False
        self._was_pressed = False
        self.z_index = 0.0
        self.visible = True

    def __repr__(self) -> str:
        return (
            f"UIButton(pressed_texture={self.pressed_texture!r}, "
            f"unpressed_texture={self.unpressed_texture!r}, "
            f"is_pressed={self._is_pressed}, was_pressed={self._was_pressed})"
        )

    def is_pressed(self) -> bool:
        return self._is_pressed

    def is_just_pressed(self) -> bool:
        return self._is_pressed and not self._was_pressed

    def is_just_released(self) -> bool:
        return not self._is_pressed and self._was_pressed

    def press(self) -> None:
        """Press the button."""
        self._rollover()
        self._is_pressed = True

    def release(self) -> None:
        """Release the button."""
        self._rollover()
        self._is_pressed = False

    def _rollover(self) -> None:
        self._was_pressed = self._is_pressed
        self._is_pressed = False

    def reset(self) -> None:
        """Forget both the current and the previous state."""
        self._is_pressed = False
        self._was_pressed = False

    def current_texture(self) -> Hashable:
        """The texture matching the button's current state."""
        return self.pressed_texture if self._is_pressed else self.unpressed_texture


def is_translation_inside_button(
    ui_button: UIButton,
    transform: Transform,
    translation: Translation,
    texture_size: TextureSizeLookup,
) -> bool:
    """Whether a world position lies within the button's current texture.

    ``texture_size`` maps a texture key to its ``(width, height)``, or to
    ``None`` when the texture is not loaded; an unknown texture is never hit.
    Scale and rotation of the button are not taken into account.
    """
    size = texture_size(ui_button.current_texture())
    if size is None:
        return False

    width, height = size
    centre = transform.translation
    half_width = float(width) / 2.0
    half_height = float(height) / 2.0
    return (
        centre.x - half_width <= translation.x <= centre.x + half_width
        and centre.y - half_height <= translation.y <= centre.y + half_height
    )


def ui_button_system(
    mouse: MouseState,
    touches: Mapping[int, TouchState],
    screen_size: tuple[int, int],
    camera_translation: Translation | None,
    buttons: Iterable[tuple[UIButton, Transform]],
    texture_size: TextureSizeLookup,
) -> None:
    """Press, release or reset every button according to the mouse and touches."""
    mouse_position = screen_translation_to_world_translation(
        screen_size, mouse.translation, camera_translation
    )
    touch_positions = {
        touch_id: screen_translation_to_world_translation(
            screen_size, touch.translation, camera_translation
        )
        for touch_id, touch in touches.items()
    }
    any_touch_pressed = any(touch.is_pressed() for touch in touches.values())

    for ui_button, transform in buttons:
        hovered = is_translation_inside_button(
            ui_button, transform, mouse_position, texture_size
        ) or any(
            is_translation_inside_button(ui_button, transform, position, texture_size)
            for position in touch_positions.values()
        )

        if not hovered:
            ui_button.reset()
        elif mouse.left.is_pressed or any_touch_pressed:
            ui_button.press()
        else:
            ui_button.release()