"""Tests for simulation configuration."""

import pytest

from patternrace.config import DEFAULT_CONFIG, SimulationConfig


class TestDefaults:
    def test_reference_values(self):
        assert DEFAULT_CONFIG.trials == 1_000_000
        assert DEFAULT_CONFIG.sequence_length == 100
        assert (DEFAULT_CONFIG.die_low, DEFAULT_CONFIG.die_high) == (1, 6)
        assert DEFAULT_CONFIG.workers >= 1
        assert DEFAULT_CONFIG.seed is None
        assert DEFAULT_CONFIG.share_sequence is False
        assert DEFAULT_CONFIG.serial_baseline is False

    def test_threshold_is_range_midpoint(self):
        assert DEFAULT_CONFIG.threshold == 3
        assert SimulationConfig(die_low=0, die_high=1).threshold == 0


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"trials": 0}, "trials"),
            ({"sequence_length": 2}, "sequence_length"),
            ({"die_low": 4, "die_high": 4}, "die range"),
            ({"workers": 0}, "workers"),
            ({"chunk_size": 0}, "chunk_size"),
            ({"seed": -5}, "seed"),
        ],
    )
    def test_invalid_values_rejected(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            SimulationConfig(**kwargs)

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"trials": 2.5}, "trials must be an integer"),
            ({"trials": True}, "trials must be an integer"),
            ({"sequence_length": "100"}, "sequence_length must be an integer"),
            ({"workers": 2.0}, "workers must be an integer"),
            ({"chunk_size": 1.5}, "chunk_size must be an integer"),
            ({"seed": "7"}, "seed must be an integer"),
            ({"share_sequence": "yes"}, "share_sequence must be a boolean"),
        ],
    )
    def test_wrong_types_rejected(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            SimulationConfig(**kwargs)

    def test_fractional_trials_from_yaml_rejected(self):
        with pytest.raises(ValueError, match="trials must be an integer"):
            SimulationConfig.from_yaml("trials: 2.5\nworkers: 1\n")


class TestReplace:
    def test_none_overrides_ignored(self):
        cfg = SimulationConfig(trials=10, workers=2)
        new = cfg.replace(trials=None, seed=5)
        assert new.trials == 10
        assert new.seed == 5
        assert cfg.seed is None

    def test_false_override_applied(self):
        cfg = SimulationConfig(share_sequence=True, workers=1)
        assert cfg.replace(share_sequence=False).share_sequence is False

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown configuration key"):
            DEFAULT_CONFIG.replace(colour="blue")

    def test_replace_validates(self):
        with pytest.raises(ValueError, match="trials"):
            DEFAULT_CONFIG.replace(trials=-1)


class TestLoading:
    def test_from_dict(self):
        cfg = SimulationConfig.from_dict({"trials": 50, "seed": 3, "workers": 1})
        assert cfg.trials == 50 and cfg.seed == 3

    def test_from_dict_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown configuration keys: bogus"):
            SimulationConfig.from_dict({"bogus": 1})

    def test_from_yaml_top_level(self):
        cfg = SimulationConfig.from_yaml("trials: 500\nsequence_length: 40\nworkers: 1\n")
        assert cfg.trials == 500
        assert cfg.sequence_length == 40

    def test_from_yaml_simulation_section(self):
        yaml_text = """
simulation:
  trials: 20
  share_sequence: true
  workers: 1
"""
        cfg = SimulationConfig.from_yaml(yaml_text)
        assert cfg.trials == 20
        assert cfg.share_sequence is True

    def test_from_yaml_empty_uses_defaults(self):
        assert SimulationConfig.from_yaml("").trials == DEFAULT_CONFIG.trials

    def test_from_yaml_rejects_non_mapping(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            SimulationConfig.from_yaml("- 1\n- 2\n")

    def test_from_file(self, tmp_path):
        path = tmp_path / "sim.yaml"
        path.write_text("trials: 7\nworkers: 1\n")
        assert SimulationConfig.from_file(path).trials == 7

    def test_to_dict_round_trip(self):
        cfg = SimulationConfig(trials=9, seed=1, workers=1)
        assert SimulationConfig.from_dict(cfg.to_dict()) == cfg
