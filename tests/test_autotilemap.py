import pytest

from emerald2d.autotilemap import (
    AutoTile,
    AutoTileMapSchema,
    AutoTileRuleset,
    AutoTileRulesetSchema,
    AutoTileRulesetSchemaTile,
    AutoTileRulesetValue,
    AutoTilemap,
    default_ruleset_grid,
    load_autotile_rulesets_from_resource,
    parse_autotile_rulesets,
)
from emerald2d.errors import EmeraldError

V = AutoTileRulesetValue


class FakeTexture:
    def __init__(self, width, height):
        self._size = (width, height)

    def size(self):
        return self._size


class FakeLoader:
    def __init__(self, strings=None, textures=None):
        self.strings = strings or {}
        self.textures = textures or {}

    def string(self, path):
        return self.strings[path]

    def texture(self, path):
        return self.textures[path]


def alone_ruleset(x=0, y=0):
    rules = [
        AutoTileRulesetSchemaTile(dx, dy, V.NONE)
        for dx in (-1, 0, 1)
        for dy in (-1, 0, 1)
        if (dx, dy) != (0, 0)
    ]
    return AutoTileRulesetSchema(x=x, y=y, rules=rules).to_ruleset()


def any_ruleset(x=1, y=0):
    return AutoTileRulesetSchema(x=x, y=y).to_ruleset()


def make_map(rulesets):
    return AutoTilemap("sheet", (16, 16), 2, 2, 3, 3, rulesets)


def test_deser_ruleset():
    ruleset_toml = """
        x = 10
        y = 11

        [[rules]]
        x = -1
        y = -1
        value = "None"

        [[rules]]
        x = -1
        y = 0
        value = "None"

        [[rules]]
        x = 1
        y = 1
        value = "Tile"
    """
    ruleset = AutoTileRulesetSchema.from_toml(ruleset_toml).to_ruleset()
    assert ruleset.x == 10
    assert ruleset.y == 11
    assert ruleset.grid[1][1] is V.NONE
    assert ruleset.grid[1][2] is V.NONE
    assert ruleset.grid[3][3] is V.TILE
    assert ruleset.grid[2][2] is V.TILE

    out_of_bounds_ruleset = """
        x = 10
        y = 11

        [[rules]]
        x = -3
        y = 0
        value = "None"
    """
    schema = AutoTileRulesetSchema.from_toml(out_of_bounds_ruleset)
    with pytest.raises(EmeraldError):
        schema.to_ruleset()


def test_deser_autotilemap():
    autotilemap_toml = """
        width = 10
        height = 11
        [tileset]
        texture = "test"
        width = 1
        height = 2
    """
    schema = AutoTileMapSchema.from_toml(autotilemap_toml)
    assert schema.width == 10
    assert schema.height == 11
    assert schema.tileset.texture == "test"
    assert schema.tileset.width == 1
    assert schema.tileset.height == 2
    assert schema.visible is True
    assert schema.z_index == 0.0

    missing_map_size = """
        tile_width = 32
        tile_height = 32
    """
    with pytest.raises(EmeraldError):
        AutoTileMapSchema.from_toml(missing_map_size)


def test_default_grid_is_all_any():
    grid = default_ruleset_grid()
    assert len(grid) == 5
    assert all(len(row) == 5 and set(row) == {V.ANY} for row in grid)


def test_unknown_rule_value_is_rejected():
    with pytest.raises(EmeraldError):
        AutoTileRulesetSchemaTile.from_dict({"x": 0, "y": 0, "value": "Maybe"})


def test_rule_at_grid_edge_is_accepted():
    ruleset = AutoTileRulesetSchema(
        x=0, y=0, rules=[AutoTileRulesetSchemaTile(2, -2, V.TILE)]
    ).to_ruleset()
    assert ruleset.grid[4][0] is V.TILE


def test_center_rule_is_forced_to_tile():
    ruleset = AutoTileRulesetSchema(
        x=0, y=0, rules=[AutoTileRulesetSchemaTile(0, 0, V.NONE)]
    ).to_ruleset()
    assert ruleset.grid[2][2] is V.TILE


def test_matches_requires_tile_at_center():
    autotiles = [AutoTile.NONE] * 9
    assert any_ruleset().matches(autotiles, 3, 3, 1, 1) is False
    autotiles[4] = AutoTile.TILE
    assert any_ruleset().matches(autotiles, 3, 3, 1, 1) is True
    assert any_ruleset().matches(autotiles, 3, 3, 5, 1) is False


def test_outside_neighbours_count_as_any():
    autotiles = [AutoTile.NONE] * 9
    autotiles[0] = AutoTile.TILE
    # A rule demanding None does not accept cells off the map.
    assert alone_ruleset().matches(autotiles, 3, 3, 0, 0) is False


def test_bake_chooses_first_matching_ruleset():
    autotilemap = make_map([alone_ruleset(0, 0), any_ruleset(1, 0)])
    autotilemap.set_tile(1, 1)
    autotilemap.bake()
    assert autotilemap.get_tile_id(1, 1) == 0
    assert autotilemap.get_tile_id(0, 0) is None

    autotilemap.set_tile(0, 1)
    autotilemap.bake()
    assert autotilemap.get_tile_id(1, 1) == 1
    assert autotilemap.get_tile_id(0, 1) == 1
    assert autotilemap.tiles() == [None, None, None, 1, 1, None, None, None, None]


def test_set_and_get_autotile():
    autotilemap = make_map([])
    autotilemap.set_tile(2, 1)
    assert autotilemap.get_autotile(2, 1) is AutoTile.TILE
    autotilemap.set_none(2, 1)
    assert autotilemap.get_autotile(2, 1) is AutoTile.NONE
    with pytest.raises(EmeraldError):
        autotilemap.set_tile(3, 0)
    with pytest.raises(EmeraldError):
        autotilemap.get_autotile(0, 3)


def test_get_and_remove_ruleset():
    first = any_ruleset(1, 0)
    autotilemap = make_map([first])
    second = alone_ruleset(0, 1)
    autotilemap.add_ruleset(second)
    assert autotilemap.get_ruleset(1) is first
    assert autotilemap.get_ruleset(3) is second
    assert autotilemap.get_ruleset(8) is None
    assert autotilemap.remove_ruleset(1) is first
    assert autotilemap.get_ruleset(1) is None
    assert autotilemap.remove_ruleset(1) is None


def test_properties():
    autotilemap = make_map([])
    autotilemap.set_z_index(2.5)
    autotilemap.set_visible(False)
    assert autotilemap.tilemap.z_index == 2.5
    assert autotilemap.tilemap.visible is False
    assert (autotilemap.width(), autotilemap.height()) == (3, 3)
    assert autotilemap.tilesheet() == "sheet"
    assert autotilemap.tile_size() == (16, 16)


def test_parse_autotile_rulesets():
    text = """
        [[rulesets]]
        x = 1
        y = 0

        [[rulesets]]
        x = 0
        y = 1
        [[rulesets.rules]]
        x = 1
        y = 0
        value = "Tile"
    """
    rulesets = parse_autotile_rulesets(text)
    assert [(r.x, r.y) for r in rulesets] == [(1, 0), (0, 1)]
    assert rulesets[1].grid[3][2] is V.TILE
    assert parse_autotile_rulesets("") == []


def test_load_rulesets_from_resource():
    loader = FakeLoader(strings={"rules.toml": "[[rulesets]]\nx = 3\ny = 4\n"})
    rulesets = load_autotile_rulesets_from_resource(loader, "rules.toml")
    assert len(rulesets) == 1
    assert isinstance(rulesets[0], AutoTileRuleset)
    assert (rulesets[0].x, rulesets[0].y) == (3, 4)


def test_to_autotilemap_with_inline_tileset():
    text = """
        width = 3
        height = 3
        z_index = 1.5
        visible = false

        [tileset]
        texture = "sheet.png"
        width = 2
        height = 2

        [[rulesets]]
        x = 1
        y = 1

        [[tiles]]
        x = 1
        y = 1
    """
    texture = FakeTexture(64, 32)
    loader = FakeLoader(textures={"sheet.png": texture})
    autotilemap = AutoTileMapSchema.from_toml(text).to_autotilemap(loader)
    assert autotilemap.tile_size() == (32, 16)
    assert autotilemap.tilesheet() is texture
    assert autotilemap.get_autotile(1, 1) is AutoTile.TILE
    assert autotilemap.tilemap.z_index == 1.5
    assert autotilemap.tilemap.visible is False
    autotilemap.bake()
    assert autotilemap.get_tile_id(1, 1) == 3


def test_to_autotilemap_with_resources():
    text = """
        width = 2
        height = 2
        tileset_resource = "tileset.toml"
        rulesets_resource = "rules.toml"

        [[rulesets]]
        x = 0
        y = 0
    """
    loader = FakeLoader(
        strings={
            "tileset.toml": 'texture = "sheet.png"\nwidth = 2\nheight = 1\n',
            "rules.toml": "[[rulesets]]\nx = 1\ny = 0\n",
        },
        textures={"sheet.png": FakeTexture(32, 16)},
    )
    autotilemap = AutoTileMapSchema.from_toml(text).to_autotilemap(loader)
    assert autotilemap.tile_size() == (16, 16)
    autotilemap.set_tile(0, 0)
    # The resource ruleset comes first, so it wins.
    assert autotilemap.compute_tileset_tile_id(0, 0) == 1


def test_to_autotilemap_without_tileset_fails():
    schema = AutoTileMapSchema(width=2, height=2)
    with pytest.raises(EmeraldError):
        schema.to_autotilemap(FakeLoader())