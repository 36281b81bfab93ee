"""Utility helpers."""

from adaptive_ticks.utils.coordinate_transform import CoordinateTransform

__all__ = ["CoordinateTransform"]
