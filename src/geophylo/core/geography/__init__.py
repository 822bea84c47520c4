"""Geography module: GeoJSON point index and canvas projection."""

from geophylo.core.geography.points import GeoPoint, load_point_index, read_point_index
from geophylo.core.geography.projection import (
    Bounds,
    CanvasLayout,
    compute_bounds,
    project_sites,
)

__all__ = [
    "Bounds",
    "CanvasLayout",
    "GeoPoint",
    "compute_bounds",
    "load_point_index",
    "project_sites",
    "read_point_index",
]
