# emerald2d

The parts of a 2D game toolkit that do not need a window or a GPU. It is pure
Python and has no runtime dependencies; TOML is read with the standard
library's `tomllib`. Python 3.11 or newer is required.

| Module | What it holds |
| --- | --- |
| `emerald2d.errors` | `EmeraldError`, the error raised throughout the package |
| `emerald2d.transform` | `Translation`, `Scale`, `Transform` value types with arithmetic |
| `emerald2d.input_types` | `TouchPhase`, `MouseButton`, `KeyCode`, `Touch`, `screen_translation_to_world_translation` |
| `emerald2d.input_state` | `ButtonState`, `MouseState`, `TouchState` |
| `emerald2d.input_engine` | `InputEngine`, `Action`, `virtual_keycode_to_keycode` |
| `emerald2d.input_handler` | `InputHandler`, the game-facing view of an `InputEngine` |
| `emerald2d.ui_button` | `UIButton`, `is_translation_inside_button`, `ui_button_system` |
| `emerald2d.profiling` | `ProfileSettings`, `Profile`, `ProfileCache`, `Profiler` |
| `emerald2d.logging_engine` | `LoggingEngine`, `LogLevel` |
| `emerald2d.tilemap` | `Tilemap`, `TilemapSchema`, `TileSchema`, `TilesetResource`, `get_tilemap_index`, `parse_tileset_resource` |
| `emerald2d.autotilemap` | `AutoTilemap`, `AutoTileRuleset`, schemas and ruleset loading |

## Installation

```
pip install emerald2d
```

## Usage

### Transforms

```python
from emerald2d.transform import Translation, Transform

step = Translation(1.0, 2.0) + Translation(3.0, 4.0)   # Translation(4.0, 6.0)
half = step / 2.0                                      # Translation(2.0, 3.0)
start = Transform.from_translation((10.0, 5.0))
moved = start + Transform.from_translation(step)
```

`Transform` addition and subtraction work component-wise on translation,
rotation and scale. A default `Scale` is `(1.0, 1.0)`.

### Screen to world coordinates

```python
from emerald2d.input_types import screen_translation_to_world_translation
from emerald2d.transform import Translation

screen_translation_to_world_translation((800, 600), Translation(400.0, 300.0))
# Translation(0.0, 0.0): the centre of the screen is the camera position
```

Screen coordinates start at the top-left corner with y growing downwards.
World coordinates are centred on the camera translation, which defaults to
the origin, with y growing upwards. Camera zoom is not taken into account.

### Input

An `InputEngine` receives raw events:

- `handle_virtual_keycode(name, pressed)` takes a key name such as `"A"`,
  `"Return"`, `"LShift"` or `"Numpad5"`. Names it does not know map to
  `KeyCode.UNKNOWN`.
- `set_key_down` / `set_key_up` take a `KeyCode` directly.
- `handle_mouse_input`, `set_mouse_down`, `set_mouse_up` and
  `handle_cursor_move` update the mouse.
- `touch_event(phase, touch_id, x, y)` records a touch.

An `InputHandler` wrapped around the engine answers questions during a frame:

```python
from emerald2d.input_engine import InputEngine
from emerald2d.input_handler import InputHandler
from emerald2d.input_types import KeyCode

engine = InputEngine()
handler = InputHandler(engine)
handler.add_action_binding_key("jump", KeyCode.SPACE)

engine.set_key_down(KeyCode.SPACE)
handler.is_action_just_pressed("jump")   # True
engine.update_and_rollover()
handler.is_action_pressed("jump")        # True
handler.is_action_just_pressed("jump")   # False
```

Call `InputEngine.update_and_rollover()` once at the end of each frame. It
moves the current state of keys, mouse buttons and touches into the previous
state and drops touches that are neither pressed now nor were last frame.

`InputHandler.mouse()` and `get_key_state()` return snapshots.
`touches()` returns a read-only mapping.

`touches_to_mouse()` reflects the most recent touch as a mouse click. One
touch drives the left button, two the right, and more the middle.
`mouse_to_touch()` records the left mouse button as a touch with id
`0xC0FFEE`.

### UI buttons

A `UIButton` has a pressed and an unpressed texture key. `press()`,
`release()` and `reset()` change its state. `is_pressed()`,
`is_just_pressed()` and `is_just_released()` report it.

`ui_button_system` updates buttons from the mouse and touches. The caller
supplies:

- the screen size and the camera translation;
- the `(UIButton, Transform)` pairs;
- a `texture_size` function mapping a texture key to `(width, height)`, or
  `None` when the texture is unknown.

A button is hit when a world position falls inside its current texture,
centred on its translation. Scale and rotation are not taken into account.
A button that is neither under the mouse nor under any touch is reset.

### Profiling

```python
from emerald2d.profiling import ProfileCache, ProfileSettings

cache = ProfileCache(ProfileSettings())
cache.start_frame("game_loop", 0.0)
elapsed = cache.finish_frame("game_loop", 0.25)  # 0.25
```

Starting a profile that is already running, or finishing one that was never
started, raises `emerald2d.errors.EmeraldError`. Each profile keeps its most
recent frames, newest first, up to the limit in `ProfileSettings.frame_limit`
(600 by default). A `Profiler` binds a cache, a name and a time captured at
creation.

### Logging

```python
from emerald2d.logging_engine import LoggingEngine

with LoggingEngine("game.log") as log:
    log.info("level loaded")
    log.warning("texture missing, using fallback")
```

Each message is appended to the file as its own line, without its level, and
the file is flushed straight away. The default path is `./emerald.log`.
`LoggingEngine(None)` writes nothing. Failures to open or write the file
raise `EmeraldError`.

### Tilemaps

`get_tilemap_index(x, y, width, height)` turns a grid position into a
row-major index. A position outside the grid raises `EmeraldError`.

```python
from emerald2d.tilemap import get_tilemap_index

get_tilemap_index(3, 2, 10, 10)  # 23
```

`TilemapSchema.from_toml` reads a map description:

```toml
width = 10
height = 10

[tileset]
texture = "tileset.png"
width = 2
height = 2

[[tiles]]
id = 14
x = 5
y = 6
```

A description may give `resource`, the path of a tileset resource, instead of
the `[tileset]` table. `visible` (default `true`) and `z_index` (default `0.0`)
are optional.

`to_tilemap(loader)` builds the `Tilemap`. The loader is an object you supply
with two methods:

- `string(path)`, returning the text of a resource;
- `texture(path)`, returning an object whose `size()` gives
  `(width, height)` in pixels.

The tile size is the texture size divided by the tileset size in tiles.

### Autotiling

An `AutoTilemap` holds a grid of set and empty cells and a list of
`AutoTileRuleset`s. Each ruleset names a tileset tile `(x, y)` and a 5x5
neighbourhood of `Any`, `None` or `Tile` cells; cells outside the map count
as `Any`. `bake()` fills the inner tilemap. Every cell takes the tile of the
first ruleset that matches it, or `None` when no ruleset does.

```python
from emerald2d.autotilemap import AutoTileRulesetSchema, AutoTilemap

ruleset = AutoTileRulesetSchema.from_toml("""
x = 0
y = 0

[[rules]]
x = -1
y = 0
value = "None"
""").to_ruleset()

autotiles = AutoTilemap("sheet", (16, 16), 4, 4, 3, 3, [ruleset])
autotiles.set_tile(1, 1)
autotiles.bake()
autotiles.get_tile_id(1, 1)  # 0
autotiles.get_tile_id(0, 0)  # None
```

Rule positions must lie within two cells of the centre; others raise
`EmeraldError`. `parse_autotile_rulesets(text)` reads the `[[rulesets]]`
array of a rulesets resource. `load_autotile_rulesets_from_resource(loader,
path)` does the same through a loader.

`AutoTileMapSchema.from_toml` reads a full autotilemap description, with:

- a tileset, inline or by `tileset_resource`;
- rulesets inline and from an optional `rulesets_resource`, the resource's
  coming first;
- the set `tiles`, `z_index` and `visible`.

`to_autotilemap(loader)` builds it.

## What this package does not do

It opens no window and has no event loop, rendering, audio, physics or
gamepad support. It does not load assets or textures itself: tilemaps and
autotilemaps take a loader you provide, and UI buttons take a texture-size
function. Input arrives only through the `InputEngine` methods above; nothing
reads the keyboard, mouse or touch screen directly.

## Running the tests

```
pip install -e ".[test]"
pytest
```