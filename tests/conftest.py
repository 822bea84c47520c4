"""
Shared pytest fixtures for geophylo tests.

Provides reusable tree strings, GeoJSON documents and temporary input
files for unit and integration testing.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from tests.factories import feature_collection, nexus_document

# =============================================================================
# Tree Text Fixtures
# =============================================================================


@pytest.fixture
def simple_newick() -> str:
    """Three-leaf tree used by the end-to-end example."""
    return "(A:1,(B:1,C:1):1);"


@pytest.fixture
def simple_points() -> dict[str, tuple[float, float]]:
    """Points for A, B (east of A) and C (north of A)."""
    return {"A": (0.0, 0.0), "B": (10.0, 0.0), "C": (0.0, 10.0)}


@pytest.fixture
def simple_geojson(simple_points: dict[str, tuple[float, float]]) -> dict[str, Any]:
    return feature_collection(simple_points)


@pytest.fixture
def baltic_nexus() -> str:
    """NEXUS tree with a translate table and bracketed glottocodes."""
    return nexus_document(
        "((1:0.3,2:0.4):0.2,(3:0.1,4:0.5):0.6);",
        translate={
            "1": "'Latvian [latv1249]'",
            "2": "'Lithuanian [lith1251]'",
            "3": "'Polish [poli1260]'",
            "4": "'Czech [czec1258]'",
        },
    )


@pytest.fixture
def baltic_points() -> dict[str, tuple[float, float]]:
    return {
        "latv1249": (24.1, 56.9),
        "lith1251": (23.9, 54.7),
        "poli1260": (19.0, 52.1),
        "czec1258": (15.5, 49.8),
    }


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def tree_file(tmp_path: Path, simple_newick: str) -> Path:
    path = tmp_path / "simple.dnd"
    path.write_text(simple_newick + "\n")
    return path


@pytest.fixture
def geojson_file(tmp_path: Path, simple_geojson: dict[str, Any]) -> Path:
    path = tmp_path / "simple.geojson"
    path.write_text(json.dumps(simple_geojson))
    return path


@pytest.fixture
def nexus_file(tmp_path: Path, baltic_nexus: str) -> Path:
    path = tmp_path / "baltic.nex"
    path.write_text(baltic_nexus)
    return path


@pytest.fixture
def baltic_geojson_file(tmp_path: Path, baltic_points: dict[str, tuple[float, float]]) -> Path:
    path = tmp_path / "baltic.geojson"
    path.write_text(json.dumps(feature_collection(baltic_points)))
    return path
