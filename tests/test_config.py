import json

import pytest

from hexsort.config import GameConfig, load_config


def test_defaults_match_the_classic_game():
    config = GameConfig()
    assert config.board_radius == 2
    assert config.merge_threshold == 10
    assert config.points_per_unit == 10
    assert config.option_slots == 3
    assert config.palette() == ('cyan', 'purple', 'green', 'red', 'orange', 'blue')
    assert config.level_target(1) == 100
    assert config.level_target(3) == 300


def test_palette_is_a_prefix():
    assert GameConfig(palette_size=3).palette() == ('cyan', 'purple', 'green')


@pytest.mark.parametrize(
    "overrides",
    [
        {'board_radius': -1},
        {'palette_size': 0},
        {'palette_size': 7},
        {'stack_size_range': (4, 2)},
        {'stack_size_range': (0, 3)},
        {'colors_per_stack_range': (1,)},
        {'color_switch_chance': 1.5},
        {'merge_threshold': 1},
        {'level_target_step': 0},
        {'option_slots': 0},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValueError):
        GameConfig(**overrides)


def test_from_mapping_converts_lists_and_rejects_unknown_keys():
    config = GameConfig.from_mapping({'stack_size_range': [2, 4], 'board_radius': 3})
    assert config.stack_size_range == (2, 4)
    assert config.board_radius == 3
    with pytest.raises(ValueError, match="bogus"):
        GameConfig.from_mapping({'bogus': 1})


def test_load_config_reads_json_file(tmp_path):
    path = tmp_path / "game.json"
    path.write_text(json.dumps({'merge_threshold': 8, 'palette_size': 4}), encoding="utf-8")
    config = load_config(path)
    assert config.merge_threshold == 8
    assert config.palette_size == 4
    assert config.option_slots == 3


def test_load_config_requires_an_object(tmp_path):
    path = tmp_path / "game.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
