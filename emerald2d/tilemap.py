"""Grids of tiles drawn from a tilesheet, and the schemas they load from."""

from __future__ import annotations

import tomllib
from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from .errors import EmeraldError

TileId = int


class Texture(Protocol):
    def size(self) -> tuple[int, int]: ...


class AssetLoader(Protocol):
    def string(self, path: str) -> str: ...

    def texture(self, path: str) -> Texture: ...


def _parse_toml(text: str) -> dict[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise EmeraldError.from_exception(exc) from exc


def _require(data: Mapping[str, Any], key: str) -> Any:
    if key not in data:
        raise EmeraldError(f"missing field `{key}`")
    return data[key]


def _usize(data: Mapping[str, Any], key: str) -> int:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise EmeraldError(f"invalid value for `{key}`: expected a non-negative integer")
    return value


def _float(data: Mapping[str, Any], key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EmeraldError(f"invalid value for `{key}`: expected a number")
    return float(value)


def _bool(data: Mapping[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise EmeraldError(f"invalid value for `{key}`: expected a boolean")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise EmeraldError(f"invalid value for `{key}`: expected a string")
    return value


def _table(value: Any, key: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise EmeraldError(f"invalid value for `{key}`: expected a table")
    return value


def _tables(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise EmeraldError(f"invalid value for `{key}`: expected an array of tables")
    return [_table(item, key) for item in value]


def get_tilemap_index(x: int, y: int, width: int, height: int) -> int:
    """Index of the cell (x, y) in a row-major grid of the given size."""
    if x >= width:
        raise EmeraldError(f"Given x: {x} is outside the width of {width}")
    if y >= height:
        raise EmeraldError(f"Given y: {y} is outside the height of {height}")
    return y * width + x


@dataclass
class TileSchema:
    """One placed tile as written in a tilemap description."""

    x: int
    y: int
    id: TileId

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TileSchema":
        return cls(x=_usize(data, "x"), y=_usize(data, "y"), id=_usize(data, "id"))

    @classmethod
    def from_toml(cls, text: str) -> "TileSchema":
        return cls.from_dict(_parse_toml(text))


@dataclass
class TilesetResource:
    """A tilesheet texture and its size in tiles."""

    texture: str
    height: int
    width: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TilesetResource":
        texture = _require(data, "texture")
        if not isinstance(texture, str):
            raise EmeraldError("invalid value for `texture`: expected a string")
        return cls(texture=texture, height=_usize(data, "height"), width=_usize(data, "width"))


def parse_tileset_resource(text: str) -> TilesetResource:
    """Read a tileset resource from TOML text."""
    return TilesetResource.from_dict(_parse_toml(text))


@dataclass
class TilemapSchema:
    """A tilemap description: size, tileset and a list of placed tiles."""

    width: int
    height: int
    tileset: TilesetResource | None = None
    resource: str | None = None
    visible: bool = True
    z_index: float = 0.0
    tiles: list[TileSchema] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TilemapSchema":
        tileset = data.get("tileset")
        return cls(
            width=_usize(data, "width"),
            height=_usize(data, "height"),
            tileset=(
                TilesetResource.from_dict(_table(tileset, "tileset"))
                if tileset is not None
                else None
            ),
            resource=_optional_str(data, "resource"),
            visible=_bool(data, "visible", True),
            z_index=_float(data, "z_index", 0.0),
            tiles=[TileSchema.from_dict(tile) for tile in _tables(data, "tiles")],
        )

    @classmethod
    def from_toml(cls, text: str) -> "TilemapSchema":
        return cls.from_dict(_parse_toml(text))

    def to_tilemap(self, loader: AssetLoader) -> "Tilemap":
        """Build the tilemap, loading the tileset resource and texture through ``loader``."""
        if self.tileset is None and self.resource is None:
            raise EmeraldError(
                "Tilemaps require either a tileset texture or a path to a tileset resource."
            )

        if self.tileset is not None:
            resource = self.tileset
        else:
            resource = parse_tileset_resource(loader.string(self.resource))

        texture = loader.texture(resource.texture)
        texture_width, texture_height = texture.size()
        tile_size = (int(texture_width) // resource.width, int(texture_height) // resource.height)

        tilemap = Tilemap(
            texture,
            tile_size,
            resource.width,
            resource.height,
            self.width,
            self.height,
        )
        for tile in self.tiles:
            tilemap.set_tile(tile.x, tile.y, tile.id)
        return tilemap


class Tilemap:
    """A width by height grid of optional tile ids from a tilesheet."""

    def __init__(
        self,
        tilesheet: Hashable,
        tile_size: tuple[int, int],
        tilesheet_width: int,
        tilesheet_height: int,
        width: int,
        height: int,
    ) -> None:
        self.tilesheet = tilesheet
        # Size of one tile in pixels.
        self.tile_size = tuple(tile_size)
        # Size of the tilesheet in tiles.
        self.tilesheet_width = tilesheet_width
        self.tilesheet_height = tilesheet_height
        self.width = width
        self.height = height
        self.tiles: list[TileId | None] = [None] * (width * height)
        self.z_index = 0.0
        self.visible = True

    def __repr__(self) -> str:
        return (
            f"Tilemap(width={self.width}, height={self.height}, "
            f"tile_size={self.tile_size}, tilesheet={self.tilesheet!r})"
        )

    def _index(self, x: int, y: int) -> int:
        index = get_tilemap_index(x, y, self.width, self.height)
        if index >= len(self.tiles):
            raise EmeraldError(
                f"Position {(x, y)} does not exist. Tilemap size is {self.size()}"
            )
        return index

    def get_tile(self, x: int, y: int) -> TileId | None:
        return self.tiles[self._index(x, y)]

    def set_tile(self, x: int, y: int, new_tile: TileId | None) -> None:
        self.tiles[self._index(x, y)] = new_tile

    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def tile_width(self) -> int:
        return self.tile_size[0]

    def tile_height(self) -> int:
        return self.tile_size[1]

    def set_tilesheet(self, tilesheet: Hashable) -> None:
        self.tilesheet = tilesheet