"""Window-independent core of a 2D game toolkit: input, UI buttons, transforms, profiling, logging and tilemaps."""

__version__ = "0.1.0"

__all__ = [
    "autotilemap",
    "errors",
    "input_engine",
    "input_handler",
    "input_state",
    "input_types",
    "logging_engine",
    "profiling",
    "tilemap",
    "transform",
    "ui_button",
]