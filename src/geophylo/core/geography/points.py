"""
Load identifier -> (longitude, latitude) pairs from GeoJSON.

Only Point features are used. A feature is identified by its own ``id``
or, failing that, by ``properties.language.id`` (the Glottolog-style
layout of language GeoJSON exports). Unusable features are skipped and
summarized in one log line.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any, NamedTuple

from geophylo.core.exceptions import InvalidGeoJsonError, MissingFeaturesError

logger = logging.getLogger(__name__)


class GeoPoint(NamedTuple):
    """Point location in degrees."""

    lon: float
    lat: float


PointIndex = dict[str, GeoPoint]


def _is_coordinate(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _feature_id(feature: Mapping[str, Any]) -> str | None:
    raw = feature.get("id")
    if isinstance(raw, int) and not isinstance(raw, bool):
        raw = str(raw)
    if isinstance(raw, str) and raw.strip():
        return raw

    properties = feature.get("properties")
    if not isinstance(properties, Mapping):
        return None
    language = properties.get("language")
    if not isinstance(language, Mapping):
        return None
    raw = language.get("id")
    if isinstance(raw, str) and raw.strip():
        return raw
    return None


def _feature_point(feature: Mapping[str, Any]) -> GeoPoint | None:
    geometry = feature.get("geometry")
    if not isinstance(geometry, Mapping) or geometry.get("type") != "Point":
        return None
    coords = geometry.get("coordinates")
    if not isinstance(coords, list) or len(coords) < 2:
        return None
    lon, lat = coords[0], coords[1]
    if not (_is_coordinate(lon) and _is_coordinate(lat)):
        return None
    return GeoPoint(float(lon), float(lat))


def load_point_index(document: Any, source: str = "<document>") -> PointIndex:
    """Build the point index from a decoded GeoJSON document.

    Args:
        document: Decoded JSON value (expected to be a FeatureCollection).
        source: Name used in error messages.

    Returns:
        Mapping from feature identifier to its point. Duplicate identifiers
        keep the last feature seen.

    Raises:
        InvalidGeoJsonError: If the document is not a JSON object.
        MissingFeaturesError: If there is no 'features' array.
    """
    if not isinstance(document, Mapping):
        raise InvalidGeoJsonError(source, f"top level is {type(document).__name__}, not an object")
    features = document.get("features")
    if not isinstance(features, list):
        raise MissingFeaturesError(source)

    index: PointIndex = {}
    duplicates: list[str] = []
    skipped = 0
    for feature in features:
        if not isinstance(feature, Mapping):
            skipped += 1
            continue
        feature_id = _feature_id(feature)
        point = _feature_point(feature)
        if feature_id is None or point is None:
            skipped += 1
            continue
        if feature_id in index:
            duplicates.append(feature_id)
        index[feature_id] = point

    if skipped:
        logger.warning(
            f"Skipped {skipped} of {len(features)} GeoJSON features without an id "
            "or a finite Point geometry"
        )
    if duplicates:
        logger.warning(
            f"{len(duplicates)} duplicate GeoJSON ids overwritten (last wins): "
            f"{', '.join(sorted(set(duplicates))[:10])}"
        )
    logger.info(f"Loaded {len(index)} GeoJSON points from {source}")
    return index


def read_point_index(path: Path) -> PointIndex:
    """Read a GeoJSON file and build its point index.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidGeoJsonError: If the file is not valid JSON.
        MissingFeaturesError: If there is no 'features' array.
    """
    text = path.read_text(encoding="utf-8-sig")
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidGeoJsonError(str(path), f"invalid JSON ({e.msg} at line {e.lineno})") from e
    return load_point_index(document, source=str(path))
