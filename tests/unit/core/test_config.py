"""Unit tests for PreallocConfig."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

import pytest

from prealloc.core.config import PreallocConfig
from prealloc.core.errors import ConfigurationError


def cli_args(**overrides) -> Namespace:
    values = dict(
        size=None,
        path=None,
        random=None,
        slow_threshold=None,
        dry_run=None,
        log_level=None,
        log_file=None,
        config=None,
    )
    values.update(overrides)
    return Namespace(**values)


class TestDefaults:

    def test_defaults(self):
        config = PreallocConfig()

        assert config.target_gb == 256
        assert config.volume_path == Path("/mnt")
        assert config.random_fill is False
        assert config.slow_threshold_s == 600.0
        assert config.dry_run is False
        assert config.log_level == "info"
        assert config.log_file is None

    def test_no_sources_yields_defaults(self):
        assert PreallocConfig.from_sources(cli_args()) == PreallocConfig()

    def test_file_defaults_keys(self):
        defaults = PreallocConfig.file_defaults()

        assert defaults["size"] == 256
        assert defaults["path"] == Path("/mnt")
        assert set(defaults) == {
            "size", "path", "random", "slow_threshold", "dry_run", "log_level", "log_file",
        }


class TestMerging:

    def test_cli_overrides(self):
        config = PreallocConfig.from_sources(
            cli_args(size=12, path="/data", random=True, slow_threshold=30.0, dry_run=True)
        )

        assert config.target_gb == 12
        assert config.volume_path == Path("/data")
        assert config.random_fill is True
        assert config.slow_threshold_s == 30.0
        assert config.dry_run is True

    def test_file_values_applied(self):
        config = PreallocConfig.from_sources(
            cli_args(),
            {"size": 64, "path": Path("/srv"), "random": True, "log_level": "DEBUG", "log_file": "/tmp/p.log"},
        )

        assert config.target_gb == 64
        assert config.volume_path == Path("/srv")
        assert config.random_fill is True
        assert config.log_level == "debug"
        assert config.log_file == Path("/tmp/p.log")

    def test_cli_beats_file(self):
        config = PreallocConfig.from_sources(cli_args(size=8), {"size": 64, "path": "/srv"})

        assert config.target_gb == 8
        assert config.volume_path == Path("/srv")

    def test_unset_cli_flag_keeps_file_value(self):
        config = PreallocConfig.from_sources(cli_args(random=None), {"random": True})

        assert config.random_fill is True

    def test_to_dict(self):
        data = PreallocConfig(target_gb=3).to_dict()

        assert data["target_gb"] == 3
        assert data["volume_path"] == Path("/mnt")


class TestValidation:

    def test_zero_target_allowed(self):
        assert PreallocConfig.from_sources(cli_args(size=0)).target_gb == 0

    def test_negative_target_rejected(self):
        with pytest.raises(ConfigurationError):
            PreallocConfig.from_sources(cli_args(), {"size": -1})

    @pytest.mark.parametrize("threshold", [0.0, -5.0])
    def test_threshold_must_be_positive(self, threshold):
        with pytest.raises(ConfigurationError):
            PreallocConfig(slow_threshold_s=threshold).validate()

    def test_nan_threshold_rejected(self):
        with pytest.raises(ConfigurationError):
            PreallocConfig(slow_threshold_s=float("nan")).validate()

    def test_infinite_threshold_rejected(self):
        with pytest.raises(ConfigurationError):
            PreallocConfig.from_sources(cli_args(), {"slow_threshold": float("inf")})

    @pytest.mark.parametrize(
        "values",
        [{"size": "12GB"}, {"log_file": True}, {"path": 5}, {"random": "no"}, {"size": True}],
    )
    def test_mistyped_file_value_is_configuration_error(self, values):
        with pytest.raises(ConfigurationError):
            PreallocConfig.from_sources(cli_args(), values)
