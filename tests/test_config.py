import pytest

from tetris_engine.config import GameConfig


def test_defaults():
    config = GameConfig()
    assert (config.width, config.height, config.initial_level) == (10, 20, 1)


def test_from_mapping_accepts_partial_and_camel_case():
    config = GameConfig.from_mapping({"height": 24, "initialLevel": 3})
    assert config == GameConfig(width=10, height=24, initial_level=3)
    assert GameConfig.from_mapping({}) == GameConfig()


def test_from_mapping_rejects_unknown_options():
    with pytest.raises(TypeError):
        GameConfig.from_mapping({"speed": 2})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 3},
        {"height": 0},
        {"initial_level": 0},
        {"initial_level": 21},
    ],
)
def test_invalid_values_raise(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)
