"""
In-memory point cloud container.

Positions are an (N, 3) float64 array. Every other per-point quantity is a
named attribute whose first dimension must match N; colors are stored as
the attribute named ``"colors"`` ((N, 3) uint8).

Readers produce PointCloud, writers consume PointCloud.
"""

from __future__ import annotations

import logging

import numpy as np

from src.shared.exceptions import PointCloudError


logger = logging.getLogger(__name__)

COLORS_ATTR = "colors"
INTENSITIES_ATTR = "intensities"


def _as_color_array(colors: np.ndarray) -> np.ndarray:
    if colors.ndim != 2 or colors.shape[1] != 3:
        raise PointCloudError(
            f"Invalid colors shape: {colors.shape}, expected (N, 3)", attribute=COLORS_ATTR
        )
    if colors.dtype != np.uint8:
        colors = np.clip(colors, 0, 255).astype(np.uint8)
    return colors


class PointCloud:
    """Point positions plus named per-point attributes.

    Attributes are kept in insertion order. An attribute is only reported
    by ``has_point_attr`` when it is non-empty and has one row per point.

    Example
    -------
    >>> cloud = PointCloud()
    >>> cloud.set_points(np.zeros((2, 3)))
    >>> cloud.set_point_attr("intensities", np.array([[1.0], [2.0]]))
    >>> cloud.has_point_attr("intensities")
    True
    """

    def __init__(self, points: np.ndarray | None = None):
        self._points: np.ndarray = np.empty((0, 3), dtype=np.float64)
        self._attrs: dict[str, np.ndarray] = {}
        if points is not None:
            self.set_points(points)

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def set_points(self, points: np.ndarray) -> None:
        """Replace positions.

        Existing attributes whose row count no longer matches are dropped.
        """
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 3:
            raise PointCloudError(
                f"Invalid positions shape: {points.shape}, expected (N, 3)", attribute="positions"
            )
        self._points = points

        stale = [name for name, arr in self._attrs.items() if arr.shape[0] != len(points)]
        for name in stale:
            logger.debug("Dropping attribute %s after positions resize", name)
            del self._attrs[name]

    def get_points(self) -> np.ndarray:
        return self._points

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def set_point_attr(self, name: str, values: np.ndarray) -> None:
        """Set a named per-point attribute.

        ``"colors"`` is always stored as (N, 3) uint8, clipped to [0, 255].

        Raises
        ------
        PointCloudError
            If the row count differs from the number of points, or colors
            are not (N, 3)
        """
        values = np.asarray(values)
        if values.ndim == 0 or values.shape[0] != len(self._points):
            rows = values.shape[0] if values.ndim else 0
            raise PointCloudError(
                "Attribute row count does not match points",
                attribute=name,
                expected_rows=len(self._points),
                actual_rows=rows,
            )
        if name == COLORS_ATTR:
            values = _as_color_array(values)
        self._attrs[name] = values

    def get_point_attr(self, name: str) -> np.ndarray:
        """Get a named attribute.

        Raises
        ------
        KeyError
            If the attribute is not set
        """
        try:
            return self._attrs[name]
        except KeyError:
            raise KeyError(f"Point attribute not found: {name}") from None

    def has_point_attr(self, name: str) -> bool:
        values = self._attrs.get(name)
        return values is not None and len(values) > 0 and len(values) == len(self._points)

    def remove_point_attr(self, name: str) -> None:
        self._attrs.pop(name, None)

    @property
    def attribute_names(self) -> list[str]:
        return list(self._attrs)

    # Colors are an attribute with a fixed name and dtype
    def set_point_colors(self, colors: np.ndarray) -> None:
        self.set_point_attr(COLORS_ATTR, colors)

    def get_point_colors(self) -> np.ndarray:
        return self.get_point_attr(COLORS_ATTR)

    def has_point_colors(self) -> bool:
        return self.has_point_attr(COLORS_ATTR)

    # ------------------------------------------------------------------
    # Whole-cloud operations
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Remove positions and all attributes."""
        self._points = np.empty((0, 3), dtype=np.float64)
        self._attrs.clear()

    def is_empty(self) -> bool:
        return len(self._points) == 0

    def remove_non_finite_points(
        self, remove_nan: bool = True, remove_infinite: bool = True
    ) -> int:
        """Drop points whose position has NaN and/or infinite components.

        Attributes are filtered with the same mask.

        Returns
        -------
        int
            Number of points removed
        """
        if not (remove_nan or remove_infinite) or self.is_empty():
            return 0

        bad = np.zeros(len(self._points), dtype=bool)
        if remove_nan:
            bad |= np.isnan(self._points).any(axis=1)
        if remove_infinite:
            bad |= np.isinf(self._points).any(axis=1)

        removed = int(bad.sum())
        if removed:
            keep = ~bad
            self._points = self._points[keep]
            self._attrs = {name: arr[keep] for name, arr in self._attrs.items()}
            logger.debug("Removed %d non-finite points", removed)
        return removed

    def clone(self) -> PointCloud:
        """Create a deep copy of this PointCloud."""
        other = PointCloud()
        other._points = self._points.copy()
        other._attrs = {name: arr.copy() for name, arr in self._attrs.items()}
        return other

    def __len__(self) -> int:
        return len(self._points)

    def __repr__(self) -> str:
        attrs = ", ".join(self._attrs) if self._attrs else "none"
        return f"PointCloud(n={len(self)}, attributes=[{attrs}])"
