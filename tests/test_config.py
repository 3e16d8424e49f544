"""Tests for settings bundles and their YAML files."""

import io
import logging
import os
import sys

import numpy as np
import pytest
import yaml
from pydantic import ValidationError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from endgame import (
    ConfigurationError, EndgameSettings, Security, SettingsBundle, Tolerances,
    default_settings, hermite_interpolate_and_solve, load_settings, save_settings
)
from observability import setup_logging


class TestBundles:
    """Validation of the individual bundles."""

    def test_defaults(self):
        settings = default_settings()
        assert settings.endgame.num_sample_points == 2
        assert settings.endgame.sample_factor == 0.5
        assert settings.tolerances.final_tolerance == 1e-11
        assert settings.security.max_norm == 1e5

    @pytest.mark.parametrize("factor", [0.0, 1.0, 1.5, -0.5])
    def test_sample_factor_bounds(self, factor):
        with pytest.raises(ValidationError):
            EndgameSettings(sample_factor=factor)

    def test_minimum_sample_points(self):
        with pytest.raises(ValidationError):
            EndgameSettings(num_sample_points=1)

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            Tolerances(final_tol=1e-8)

    def test_negative_security_level(self):
        with pytest.raises(ValidationError):
            Security(level=-1)

    def test_builder_wrong_type(self):
        with pytest.raises(TypeError):
            SettingsBundle.build(endgame=Tolerances(), security=Security(), tolerances=Tolerances())


class TestSettingsFiles:
    """YAML load and save."""

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "endgame.yaml"
        path.write_text("endgame:\n  num_sample_points: 4\n  sample_factor: 0.25\n")

        settings = load_settings(path)

        assert settings.endgame.num_sample_points == 4
        assert settings.endgame.sample_factor == 0.25
        assert settings.tolerances == Tolerances()
        assert settings.security == Security()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path) == default_settings()

    def test_unknown_section(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("tracker:\n  predictor: euler\n")
        with pytest.raises(ConfigurationError, match="tracker"):
            load_settings(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("endgame:\n  sample_factor: 2.0\n")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "absent.yaml")

    def test_save_then_load(self, tmp_path):
        bundle = SettingsBundle.build(
            endgame=EndgameSettings(num_sample_points=5, sample_factor=0.3),
            security=Security(level=1, max_norm=1e4),
            tolerances=Tolerances(final_tolerance=1e-13),
        )
        path = save_settings(bundle, tmp_path / "out" / "settings.yaml")

        raw = yaml.safe_load(path.read_text())
        assert set(raw) == {"endgame", "security", "tolerances"}
        assert load_settings(path) == bundle


class TestLogging:
    """Logging setup used by endgame runs."""

    @pytest.fixture
    def endgame_logger(self):
        logger = logging.getLogger("Endgame")
        handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
        yield logger
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate

    def test_records_reach_stream(self, endgame_logger):
        stream = io.StringIO()
        logger = setup_logging("debug", format_type="plain", stream=stream)

        assert logger is endgame_logger
        assert logger.level == logging.DEBUG
        hermite_interpolate_and_solve(0.0, 1, [0.5], [np.ones(1)], [np.ones(1)])
        assert "DEBUG - Hermite extrapolation over 1 samples" in stream.getvalue()

    def test_root_logger_untouched(self, endgame_logger):
        root = logging.getLogger()
        handlers = list(root.handlers)

        setup_logging("info", stream=io.StringIO())

        assert root.handlers == handlers

    def test_repeated_setup_replaces_handler(self, endgame_logger):
        first, second = io.StringIO(), io.StringIO()
        before = len(endgame_logger.handlers)
        setup_logging("info", format_type="plain", stream=first)
        setup_logging("info", format_type="plain", stream=second)

        assert len(endgame_logger.handlers) == before + 1
        endgame_logger.info("settings loaded")
        assert first.getvalue() == ""
        assert second.getvalue() == "INFO - settings loaded\n"


if __name__ == "__main__":
    pytest.main([__file__])
