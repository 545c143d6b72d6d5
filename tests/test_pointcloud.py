"""Tests for the PointCloud container."""

import numpy as np
import pytest

from src.domain.pointcloud import COLORS_ATTR, INTENSITIES_ATTR, PointCloud
from src.shared.exceptions import PointCloudError


class TestPositions:
    """Test position handling."""

    def test_default_is_empty(self):
        cloud = PointCloud()

        assert cloud.is_empty()
        assert len(cloud) == 0
        assert cloud.get_points().shape == (0, 3)

    def test_set_points_casts_to_float64(self):
        cloud = PointCloud()
        cloud.set_points(np.array([[1, 2, 3]], dtype=np.int32))

        assert cloud.get_points().dtype == np.float64
        assert len(cloud) == 1

    def test_set_points_rejects_bad_shape(self):
        cloud = PointCloud()

        with pytest.raises(PointCloudError, match="attribute: positions"):
            cloud.set_points(np.zeros((4, 2)))

    def test_resize_drops_stale_attributes(self):
        """Attributes whose row count no longer matches are removed."""
        cloud = PointCloud(np.zeros((3, 3)))
        cloud.set_point_attr(INTENSITIES_ATTR, np.ones((3, 1)))

        cloud.set_points(np.zeros((5, 3)))

        assert not cloud.has_point_attr(INTENSITIES_ATTR)
        assert cloud.attribute_names == []


class TestAttributes:
    """Test named per-point attributes."""

    def test_set_and_get(self):
        cloud = PointCloud(np.zeros((2, 3)))
        cloud.set_point_attr(INTENSITIES_ATTR, np.array([[1.0], [2.0]]))

        assert cloud.has_point_attr(INTENSITIES_ATTR)
        np.testing.assert_array_equal(cloud.get_point_attr(INTENSITIES_ATTR)[:, 0], [1.0, 2.0])

    def test_row_mismatch_raises(self):
        cloud = PointCloud(np.zeros((2, 3)))

        with pytest.raises(PointCloudError) as exc_info:
            cloud.set_point_attr(INTENSITIES_ATTR, np.ones((3, 1)))

        assert exc_info.value.expected_rows == 2
        assert exc_info.value.actual_rows == 3

    def test_missing_attribute_raises_key_error(self):
        cloud = PointCloud(np.zeros((2, 3)))

        assert not cloud.has_point_attr("missing")
        with pytest.raises(KeyError):
            cloud.get_point_attr("missing")

    def test_remove_attribute(self):
        cloud = PointCloud(np.zeros((1, 3)))
        cloud.set_point_attr(INTENSITIES_ATTR, np.ones((1, 1)))

        cloud.remove_point_attr(INTENSITIES_ATTR)
        cloud.remove_point_attr(INTENSITIES_ATTR)

        assert not cloud.has_point_attr(INTENSITIES_ATTR)


class TestColors:
    """Test the colors attribute."""

    def test_colors_stored_as_uint8(self):
        cloud = PointCloud(np.zeros((2, 3)))
        cloud.set_point_colors(np.array([[300, -4, 12], [0, 255, 128]]))

        colors = cloud.get_point_colors()
        assert colors.dtype == np.uint8
        np.testing.assert_array_equal(colors, [[255, 0, 12], [0, 255, 128]])
        assert cloud.has_point_colors()
        assert COLORS_ATTR in cloud.attribute_names

    def test_generic_setter_normalizes_colors(self):
        """Colors set by attribute name get the same uint8 clipping."""
        cloud = PointCloud(np.zeros((2, 3)))
        cloud.set_point_attr(COLORS_ATTR, np.array([[300.7, -1.0, 5.9], [10.0, 20.0, 30.0]]))

        colors = cloud.get_point_colors()
        assert colors.dtype == np.uint8
        np.testing.assert_array_equal(colors, [[255, 0, 5], [10, 20, 30]])

    def test_generic_setter_rejects_bad_color_shape(self):
        cloud = PointCloud(np.zeros((2, 3)))

        with pytest.raises(PointCloudError, match="attribute: colors"):
            cloud.set_point_attr(COLORS_ATTR, np.zeros((2, 1)))

    def test_colors_reject_bad_shape(self):
        cloud = PointCloud(np.zeros((2, 3)))

        with pytest.raises(PointCloudError):
            cloud.set_point_colors(np.zeros((2, 4), dtype=np.uint8))


class TestWholeCloud:
    """Test clear, clone and non-finite removal."""

    def test_clear(self, scenario_b_cloud):
        scenario_b_cloud.clear()

        assert scenario_b_cloud.is_empty()
        assert not scenario_b_cloud.has_point_colors()
        assert scenario_b_cloud.attribute_names == []

    def test_clone_is_independent(self, scenario_b_cloud):
        copy = scenario_b_cloud.clone()
        copy.get_points()[0, 0] = 42.0

        assert scenario_b_cloud.get_points()[0, 0] == 0.0
        assert copy.attribute_names == scenario_b_cloud.attribute_names

    def test_remove_nan_points_filters_attributes(self, scenario_b_cloud):
        points = scenario_b_cloud.get_points()
        points[0, 1] = np.nan

        removed = scenario_b_cloud.remove_non_finite_points(remove_nan=True, remove_infinite=False)

        assert removed == 1
        assert len(scenario_b_cloud) == 1
        np.testing.assert_array_equal(scenario_b_cloud.get_point_colors(), [[0, 255, 0]])
        assert scenario_b_cloud.get_point_attr(INTENSITIES_ATTR)[0, 0] == pytest.approx(3.2)

    def test_remove_infinite_only(self):
        cloud = PointCloud(np.array([[np.inf, 0, 0], [np.nan, 0, 0], [1, 1, 1]]))

        assert cloud.remove_non_finite_points(remove_nan=False, remove_infinite=True) == 1
        assert len(cloud) == 2

    def test_remove_disabled_is_noop(self):
        cloud = PointCloud(np.array([[np.nan, 0, 0]]))

        assert cloud.remove_non_finite_points(remove_nan=False, remove_infinite=False) == 0
        assert len(cloud) == 1

    def test_repr(self, scenario_b_cloud):
        assert repr(scenario_b_cloud) == "PointCloud(n=2, attributes=[intensities, colors])"
