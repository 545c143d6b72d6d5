"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path

import numpy as np
import pytest

from src.domain.pointcloud import INTENSITIES_ATTR, PointCloud


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def write_text(temp_dir):
    """Write a file with exact bytes (newline translation disabled)."""

    def _write(name: str, text: str) -> Path:
        path = temp_dir / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def sample_points():
    """Create sample positions."""
    rng = np.random.default_rng(0)
    return rng.uniform(-100.0, 100.0, size=(2500, 3))


@pytest.fixture
def xyz_cloud(sample_points):
    """Point cloud with positions only."""
    return PointCloud(sample_points)


@pytest.fixture
def xyzi_cloud(sample_points):
    """Point cloud with positions and intensities."""
    rng = np.random.default_rng(1)
    cloud = PointCloud(sample_points)
    cloud.set_point_attr(INTENSITIES_ATTR, rng.uniform(0.0, 1.0, size=(len(sample_points), 1)))
    return cloud


@pytest.fixture
def xyzirgb_cloud(xyzi_cloud):
    """Point cloud with positions, intensities and colors."""
    rng = np.random.default_rng(2)
    cloud = xyzi_cloud.clone()
    cloud.set_point_colors(rng.integers(0, 256, size=(len(cloud), 3), dtype=np.uint8))
    return cloud


@pytest.fixture
def scenario_b_cloud():
    """Two points with intensity and color."""
    cloud = PointCloud(np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]]))
    cloud.set_point_attr(INTENSITIES_ATTR, np.array([[5.5], [3.2]]))
    cloud.set_point_colors(np.array([[255, 0, 0], [0, 255, 0]], dtype=np.uint8))
    return cloud


@pytest.fixture
def progress_log():
    """Callback collecting (current, total) progress updates."""

    class _Log(list):
        def __call__(self, current, total):
            self.append((current, total))

    return _Log()
