"""Project leaf locations onto a bounded drawing canvas.

Points are projected with spherical Web-Mercator, the bounding box of all
loaded points is fitted into the canvas minus a padding margin with one
uniform scale factor, and the slack on the shorter axis is split evenly.
Canvas y grows downward, so north ends up at the top.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from geophylo.core.constants import DEFAULT_PADDING_FRACTION, MAX_MERCATOR_LATITUDE
from geophylo.core.exceptions import (
    BlankTaxonLabelError,
    DegenerateBoundsError,
    EmptyPointIndexError,
    MissingGeoIdsError,
)
from geophylo.core.geography.points import GeoPoint
from geophylo.models.tree import Site, Tree

logger = logging.getLogger(__name__)


def mercator_x(lon_deg: float) -> float:
    return math.radians(lon_deg)


def mercator_y(lat_deg: float) -> float:
    """Mercator northing for a latitude clamped to the Web-Mercator cutoff."""
    clamped = max(-MAX_MERCATOR_LATITUDE, min(MAX_MERCATOR_LATITUDE, lat_deg))
    return math.log(math.tan(math.pi / 4.0 + math.radians(clamped) / 2.0))


@dataclass(frozen=True)
class Bounds:
    """Bounding box in projected (pre-scale) coordinates."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def x_range(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_range(self) -> float:
        return self.max_y - self.min_y


def compute_bounds(points: Mapping[str, GeoPoint]) -> Bounds:
    """Compute projected bounds over every point of the index.

    Raises:
        EmptyPointIndexError: If the index is empty.
        DegenerateBoundsError: If all points share a longitude or a latitude.
    """
    if not points:
        raise EmptyPointIndexError()

    xs = [mercator_x(point.lon) for point in points.values()]
    ys = [mercator_y(point.lat) for point in points.values()]
    bounds = Bounds(min(xs), max(xs), min(ys), max(ys))
    if not (bounds.max_x > bounds.min_x and bounds.max_y > bounds.min_y):
        raise DegenerateBoundsError(bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y)
    return bounds


@dataclass(frozen=True)
class CanvasLayout:
    """Affine map from projected coordinates to canvas coordinates."""

    bounds: Bounds
    offset_x: float
    offset_y: float
    scale: float

    @classmethod
    def fit(
        cls,
        bounds: Bounds,
        width: float,
        height: float,
        padding_fraction: float = DEFAULT_PADDING_FRACTION,
    ) -> CanvasLayout:
        """Fit bounds into the padded canvas, preserving aspect ratio."""
        pad_x = width * padding_fraction
        pad_y = height * padding_fraction
        usable_width = width - 2.0 * pad_x
        usable_height = height - 2.0 * pad_y
        scale = min(usable_width / bounds.x_range, usable_height / bounds.y_range)
        extra_x = (usable_width - bounds.x_range * scale) / 2.0
        extra_y = (usable_height - bounds.y_range * scale) / 2.0
        return cls(bounds, pad_x + extra_x, pad_y + extra_y, scale)

    def to_canvas(self, point: GeoPoint) -> tuple[float, float]:
        x = self.offset_x + (mercator_x(point.lon) - self.bounds.min_x) * self.scale
        y = self.offset_y + (self.bounds.max_y - mercator_y(point.lat)) * self.scale
        return x, y


def project_sites(
    tree: Tree,
    points: Mapping[str, GeoPoint],
    width: float,
    height: float,
    padding_fraction: float = DEFAULT_PADDING_FRACTION,
) -> list[Site]:
    """Create one site per leaf, in leaf index order.

    Args:
        tree: Binary tree whose leaves carry taxon ids.
        points: Point index; all of its points define the bounds.
        width: Canvas width.
        height: Canvas height.
        padding_fraction: Fraction of each dimension kept free on each side.

    Returns:
        Sites where ``sites[i]`` belongs to the leaf with id ``i + 1``.

    Raises:
        EmptyPointIndexError: If there are no points.
        DegenerateBoundsError: If the points have zero extent on an axis.
        BlankTaxonLabelError: On the first leaf without a taxon id.
        MissingGeoIdsError: Listing every leaf taxon missing from the index.
    """
    layout = CanvasLayout.fit(compute_bounds(points), width, height, padding_fraction)

    sites: list[Site] = []
    missing: list[str] = []
    for leaf in tree.leaves_in_index_order():
        key = leaf.taxon_name
        if key is None or not key.strip():
            raise BlankTaxonLabelError(leaf.id)
        point = points.get(key)
        if point is None:
            missing.append(key)
            continue
        x, y = layout.to_canvas(point)
        sites.append(Site(x, y, leaf=leaf))

    if missing:
        raise MissingGeoIdsError(missing)

    logger.debug(f"Projected {len(sites)} sites at scale {layout.scale:.3f}")
    return sites
