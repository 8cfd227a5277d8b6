"""Unit test fixtures: a scratch volume directory and fakes for its seams."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.infrastructure.mocks.volume_mocks import FakeStatvfs, SimulatedVolume, StepClock


@pytest.fixture
def volume_dir(tmp_path: Path) -> Path:
    """An empty directory standing in for a mounted volume."""
    volume = tmp_path / "volume"
    volume.mkdir()
    return volume


@pytest.fixture
def reserved(volume_dir: Path) -> Path:
    """The volume's .preallocation directory, already created."""
    directory = volume_dir / ".preallocation"
    directory.mkdir()
    return directory


@pytest.fixture
def fake_statvfs() -> FakeStatvfs:
    return FakeStatvfs(total_gb=512, used_gb=100)


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock()


@pytest.fixture
def simulated_volume() -> SimulatedVolume:
    return SimulatedVolume()
