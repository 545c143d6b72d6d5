"""Tests for read/write options and I/O results."""

import pytest

from src.domain.options import DEFAULT_MAX_POINTS, ReadPointCloudOptions, WritePointCloudOptions
from src.domain.results import IOErrorKind, IOResult
from src.shared.exceptions import ConfigError


class TestReadPointCloudOptions:
    """Test read option validation."""

    def test_defaults(self):
        options = ReadPointCloudOptions()

        assert options.format == "auto"
        assert options.max_points == DEFAULT_MAX_POINTS
        assert options.strict_lines
        assert options.update_progress is None

    def test_invalid_max_points(self):
        with pytest.raises(ConfigError, match="field: max_points"):
            ReadPointCloudOptions(max_points=0)

    def test_max_points_disabled(self):
        assert ReadPointCloudOptions(max_points=None).max_points is None

    def test_non_callable_progress(self):
        with pytest.raises(ConfigError):
            ReadPointCloudOptions(update_progress="not callable")

    def test_from_dict_rejects_unknown(self):
        with pytest.raises(ConfigError, match="Unknown read option"):
            ReadPointCloudOptions.from_dict({"strict": False})

    def test_dict_roundtrip_drops_callback(self):
        options = ReadPointCloudOptions(strict_lines=False, update_progress=lambda c, t: None)
        data = options.to_dict()

        assert "update_progress" not in data
        restored = ReadPointCloudOptions.from_dict(data)
        assert not restored.strict_lines
        assert restored.update_progress is None


class TestWritePointCloudOptions:
    """Test write option validation."""

    @pytest.mark.parametrize("precision", [-1, 18])
    def test_invalid_precision(self, precision):
        with pytest.raises(ConfigError, match="float_precision"):
            WritePointCloudOptions(float_precision=precision)

    def test_empty_format(self):
        with pytest.raises(ConfigError, match="field: format"):
            WritePointCloudOptions(format="")

    def test_from_dict(self):
        options = WritePointCloudOptions.from_dict({"float_precision": 6, "format": "pts"})

        assert options.float_precision == 6
        assert options.format == "pts"


class TestIOResult:
    """Test result values."""

    def test_success_is_truthy(self):
        result = IOResult.success("a.pts", 3)

        assert result
        assert result.kind is None
        assert result.points == 3

    def test_failure_is_falsy(self):
        result = IOResult.failure(IOErrorKind.EMPTY_CLOUD, "point cloud has 0 points.", "a.pts")

        assert not result
        assert result.kind is IOErrorKind.EMPTY_CLOUD
        assert result.kind.value == "empty_cloud"
        assert result.points == 0
