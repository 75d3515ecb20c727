"""Unit tests for SimulationParameters and presets."""

import dataclasses

import pytest

from lavasim.core.params import SimulationParameters, PRESETS, get_preset


class TestSimulationParameters:
    """Tests for SimulationParameters."""

    def test_defaults(self):
        params = SimulationParameters()
        assert params.density == 1.25
        assert params.threshold == 0.5
        assert params.background_enabled is True
        assert len(params.base_color) == 3
        assert params.velocity_range_y < params.velocity_range_x

    def test_frozen(self):
        params = SimulationParameters()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.density = 2.0

    def test_with_overrides(self):
        params = SimulationParameters()
        faster = params.with_overrides(speed_scale=2.0)
        assert faster.speed_scale == 2.0
        assert params.speed_scale == 0.5
        assert faster.threshold == params.threshold

    @pytest.mark.parametrize(
        "changes",
        [
            {"density": 0.0},
            {"threshold": -0.1},
            {"speed_scale": -1.0},
            {"jitter_fraction": 1.0},
            {"jitter_fraction": -0.1},
            {"base_color": (256, 0, 0)},
            {"base_color": (10, 10)},
            {"fall_trigger": 1.5},
            {"fall_probability": 2.0},
            {"min_distance": 0.0},
        ],
    )
    def test_invalid_values_rejected(self, changes):
        with pytest.raises(ValueError):
            SimulationParameters(**changes)

    def test_overrides_are_validated(self):
        with pytest.raises(ValueError):
            SimulationParameters().with_overrides(jitter_fraction=1.5)


class TestPresets:
    """Tests for named presets."""

    def test_all_presets_build(self):
        for name in PRESETS:
            assert isinstance(get_preset(name), SimulationParameters)

    def test_lava_is_default(self):
        assert get_preset("lava") == SimulationParameters()

    def test_preset_with_overrides(self):
        params = get_preset("ocean", threshold=0.7)
        assert params.threshold == 0.7
        assert params.base_color == PRESETS["ocean"]["base_color"]

    def test_mono_disables_background(self):
        assert get_preset("mono").background_enabled is False

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="available"):
            get_preset("disco")
