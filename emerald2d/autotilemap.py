"""Tilemaps whose tiles are chosen by matching neighbourhood rulesets."""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import EmeraldError
from .tilemap import (
    AssetLoader,
    TileId,
    Tilemap,
    TilesetResource,
    _bool,
    _float,
    _optional_str,
    _parse_toml,
    _require,
    _table,
    _tables,
    _usize,
    get_tilemap_index,
    parse_tileset_resource,
)

AUTOTILE_RULESET_GRID_SIZE = 5
_CENTER = AUTOTILE_RULESET_GRID_SIZE // 2


class AutoTileRulesetValue(Enum):
    """What a ruleset cell demands of the map cell it covers."""

    ANY = "Any"
    NONE = "None"
    TILE = "Tile"


class AutoTile(Enum):
    """Whether a cell of an autotilemap holds a tile."""

    NONE = 0
    TILE = 1


Grid = list[list[AutoTileRulesetValue]]


def default_ruleset_grid() -> Grid:
    """A 5x5 grid accepting anything in every cell."""
    return [
        [AutoTileRulesetValue.ANY] * AUTOTILE_RULESET_GRID_SIZE
        for _ in range(AUTOTILE_RULESET_GRID_SIZE)
    ]


def _i8(data: Mapping[str, Any], key: str) -> int:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or not -128 <= value <= 127:
        raise EmeraldError(f"invalid value for `{key}`: expected an integer from -128 to 127")
    return value


def _ruleset_value(data: Mapping[str, Any], key: str) -> AutoTileRulesetValue:
    value = _require(data, key)
    try:
        return AutoTileRulesetValue(value)
    except ValueError:
        raise EmeraldError(
            f"unknown variant `{value}` for `{key}`, expected one of `Any`, `None`, `Tile`"
        ) from None


@dataclass
class AutoTileRulesetSchemaTile:
    """One rule: a position relative to the centre tile and its required value."""

    x: int
    y: int
    value: AutoTileRulesetValue

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AutoTileRulesetSchemaTile":
        return cls(x=_i8(data, "x"), y=_i8(data, "y"), value=_ruleset_value(data, "value"))


@dataclass
class AutoTileRulesetSchema:
    """A ruleset as written in a resource: the tileset tile and a list of rules.

    Cells of the 5x5 grid that no rule names are taken to be Any.
    """

    x: int
    y: int
    rules: list[AutoTileRulesetSchemaTile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AutoTileRulesetSchema":
        return cls(
            x=_usize(data, "x"),
            y=_usize(data, "y"),
            rules=[AutoTileRulesetSchemaTile.from_dict(rule) for rule in _tables(data, "rules")],
        )

    @classmethod
    def from_toml(cls, text: str) -> "AutoTileRulesetSchema":
        return cls.from_dict(_parse_toml(text))

    def to_ruleset(self) -> "AutoTileRuleset":
        """Build the 5x5 grid; raises if a rule lies outside it."""
        grid = default_ruleset_grid()
        for tile in self.rules:
            if not (-_CENTER <= tile.x <= _CENTER and -_CENTER <= tile.y <= _CENTER):
                raise EmeraldError(
                    f"Tile {tile!r} does not fit inside of the 5x5 ruleset grid."
                )
            grid[_CENTER + tile.x][_CENTER + tile.y] = tile.value

        # The centre of the grid is always the target tile.
        grid[_CENTER][_CENTER] = AutoTileRulesetValue.TILE
        return AutoTileRuleset(x=self.x, y=self.y, grid=grid)


@dataclass
class AutoTileRuleset:
    """A tileset tile at (x, y) and the 5x5 neighbourhood that selects it.

    The grid is indexed ``grid[x][y]`` with the target tile at its centre.
    Cells outside the map count as Any.
    """

    x: int
    y: int
    grid: Grid = field(default_factory=default_ruleset_grid)

    def matches(
        self,
        autotiles: Sequence[AutoTile],
        width: int,
        height: int,
        x: int,
        y: int,
    ) -> bool:
        """Whether the 5x5 area centred on (x, y) satisfies this ruleset."""
        try:
            index = get_tilemap_index(x, y, width, height)
        except EmeraldError:
            return False
        if autotiles[index] is not AutoTile.TILE:
            return False

        for ruleset_x, column in enumerate(self.grid):
            for ruleset_y, expected in enumerate(column):
                if (ruleset_x, ruleset_y) == (_CENTER, _CENTER):
                    continue
                if expected is AutoTileRulesetValue.ANY:
                    continue
                actual = _value_at(
                    autotiles,
                    width,
                    height,
                    x - _CENTER + ruleset_x,
                    y - _CENTER + ruleset_y,
                )
                if actual is not expected:
                    return False
        return True


def _value_at(
    autotiles: Sequence[AutoTile], width: int, height: int, x: int, y: int
) -> AutoTileRulesetValue:
    if x < 0 or y < 0:
        return AutoTileRulesetValue.ANY
    try:
        index = get_tilemap_index(x, y, width, height)
    except EmeraldError:
        return AutoTileRulesetValue.ANY
    if autotiles[index] is AutoTile.TILE:
        return AutoTileRulesetValue.TILE
    return AutoTileRulesetValue.NONE


def _ruleset_schemas(data: Mapping[str, Any]) -> list[AutoTileRulesetSchema]:
    return [AutoTileRulesetSchema.from_dict(item) for item in _tables(data, "rulesets")]


def parse_autotile_rulesets(text: str) -> list[AutoTileRuleset]:
    """Read the ``rulesets`` array of a TOML rulesets resource."""
    return [schema.to_ruleset() for schema in _ruleset_schemas(_parse_toml(text))]


def load_autotile_rulesets_from_resource(
    loader: AssetLoader, resource_path: str
) -> list[AutoTileRuleset]:
    """Load and parse a rulesets resource through ``loader``."""
    return parse_autotile_rulesets(loader.string(str(resource_path)))


@dataclass
class AutoTileMapSchema:
    """An autotilemap description as written in a resource."""

    width: int
    height: int
    tileset: TilesetResource | None = None
    tileset_resource: str | None = None
    # Rulesets loaded from this resource come before those given inline.
    rulesets_resource: str | None = None
    rulesets: list[AutoTileRulesetSchema] = field(default_factory=list)
    tiles: list[tuple[int, int]] = field(default_factory=list)
    z_index: float = 0.0
    visible: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AutoTileMapSchema":
        tileset = data.get("tileset")
        return cls(
            width=_usize(data, "width"),
            height=_usize(data, "height"),
            tileset=(
                TilesetResource.from_dict(_table(tileset, "tileset"))
                if tileset is not None
                else None
            ),
            tileset_resource=_optional_str(data, "tileset_resource"),
            rulesets_resource=_optional_str(data, "rulesets_resource"),
            rulesets=_ruleset_schemas(data),
            tiles=[(_usize(tile, "x"), _usize(tile, "y")) for tile in _tables(data, "tiles")],
            z_index=_float(data, "z_index", 0.0),
            visible=_bool(data, "visible", True),
        )

    @classmethod
    def from_toml(cls, text: str) -> "AutoTileMapSchema":
        return cls.from_dict(_parse_toml(text))

    def to_autotilemap(self, loader: AssetLoader) -> "AutoTilemap":
        """Build the autotilemap, loading resources and texture through ``loader``."""
        schemas: list[AutoTileRulesetSchema] = []
        if self.rulesets_resource is not None:
            schemas = _ruleset_schemas(_parse_toml(loader.string(self.rulesets_resource)))

        if self.tileset is not None:
            tileset = self.tileset
        elif self.tileset_resource is not None:
            tileset = parse_tileset_resource(loader.string(self.tileset_resource))
        else:
            raise EmeraldError(
                "Autotilemaps require either a tileset or a path to a tileset resource."
            )

        schemas = schemas + self.rulesets
        rulesets = [schema.to_ruleset() for schema in schemas]

        texture = loader.texture(tileset.texture)
        texture_width, texture_height = texture.size()
        tile_size = (int(texture_width) // tileset.width, int(texture_height) // tileset.height)

        autotilemap = AutoTilemap(
            texture,
            tile_size,
            tileset.width,
            tileset.height,
            self.width,
            self.height,
            rulesets,
        )
        for x, y in self.tiles:
            autotilemap.set_tile(x, y)
        autotilemap.set_z_index(self.z_index)
        autotilemap.set_visible(self.visible)
        return autotilemap


class AutoTilemap:
    """A map of present or absent tiles, baked into a tilemap by rulesets."""

    def __init__(
        self,
        tilesheet: Hashable,
        tile_size: tuple[int, int],
        tilesheet_width: int,
        tilesheet_height: int,
        map_width: int,
        map_height: int,
        rulesets: list[AutoTileRuleset],
    ) -> None:
        self.tilemap = Tilemap(
            tilesheet, tile_size, tilesheet_width, tilesheet_height, map_width, map_height
        )
        self._rulesets = list(rulesets)
        self._autotiles = [AutoTile.NONE] * (map_width * map_height)

    def __repr__(self) -> str:
        return (
            f"AutoTilemap(width={self.width()}, height={self.height()}, "
            f"rulesets={len(self._rulesets)})"
        )

    def bake(self) -> None:
        """Fill the inner tilemap with the tile each position's rulesets select."""
        for x in range(self.width()):
            for y in range(self.height()):
                self.tilemap.set_tile(x, y, self.compute_tileset_tile_id(x, y))

    def set_z_index(self, z_index: float) -> None:
        self.tilemap.z_index = z_index

    def set_visible(self, visible: bool) -> None:
        self.tilemap.visible = visible

    def width(self) -> int:
        return self.tilemap.width

    def height(self) -> int:
        return self.tilemap.height

    def tilesheet(self) -> Hashable:
        return self.tilemap.tilesheet

    def tile_size(self) -> tuple[int, int]:
        return self.tilemap.tile_size

    def add_ruleset(self, ruleset: AutoTileRuleset) -> None:
        self._rulesets.append(ruleset)

    def get_autotile(self, x: int, y: int) -> AutoTile:
        return self._autotiles[get_tilemap_index(x, y, self.width(), self.height())]

    def set_tile(self, x: int, y: int) -> None:
        self.set_autotile(x, y, AutoTile.TILE)

    def set_none(self, x: int, y: int) -> None:
        self.set_autotile(x, y, AutoTile.NONE)

    def set_autotile(self, x: int, y: int, new_tile: AutoTile) -> None:
        self._autotiles[get_tilemap_index(x, y, self.width(), self.height())] = new_tile

    def tiles(self) -> list[TileId | None]:
        """The baked tile ids of the inner tilemap."""
        return self.tilemap.tiles

    def _ruleset_position(self, tile_id: TileId) -> int | None:
        width, height = self.width(), self.height()
        for position, ruleset in enumerate(self._rulesets):
            try:
                if get_tilemap_index(ruleset.x, ruleset.y, width, height) == tile_id:
                    return position
            except EmeraldError:
                continue
        return None

    def get_ruleset(self, tile_id: TileId) -> AutoTileRuleset | None:
        position = self._ruleset_position(tile_id)
        return self._rulesets[position] if position is not None else None

    def remove_ruleset(self, tile_id: TileId) -> AutoTileRuleset | None:
        position = self._ruleset_position(tile_id)
        return self._rulesets.pop(position) if position is not None else None

    def compute_tileset_tile_id(self, x: int, y: int) -> TileId | None:
        """The tileset id of the first ruleset matching (x, y), if any."""
        width, height = self.width(), self.height()
        for ruleset in self._rulesets:
            if ruleset.matches(self._autotiles, width, height, x, y):
                return get_tilemap_index(
                    ruleset.x,
                    ruleset.y,
                    self.tilemap.tilesheet_width,
                    self.tilemap.tilesheet_height,
                )
        return None

    def get_tile_id(self, x: int, y: int) -> TileId | None:
        return self.tilemap.get_tile(x, y)