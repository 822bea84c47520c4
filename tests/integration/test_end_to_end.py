"""End-to-end conversion of realistic NEXUS and GeoJSON files."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from geophylo import ConversionConfig, convert
from geophylo.core.exceptions import MissingGeoIdsError, NoGeoMatchedTaxaError
from geophylo.core.geography.points import GeoPoint
from geophylo.core.geography.projection import project_sites
from geophylo.core.phylogeny.binarizer import build_tree
from geophylo.core.pipeline import parse_tree_text
from tests.factories import point_feature

BEAST_NEXUS = """\
#NEXUS

Begin taxa;
    Dimensions ntax=5;
    Taxlabels
        'Latvian [latv1249]'
        'Lithuanian [lith1251]'
        'Old Prussian [prus1238]'
        'Polish [poli1260]'
        'Czech [czec1258]'
        ;
End;

Begin trees;
    Translate
        1 'Latvian [latv1249]',
        2 'Lithuanian [lith1251]',
        3 'Old Prussian [prus1238]',
        4 'Polish [poli1260]',
        5 'Czech [czec1258]'
        ;
tree STATE_0 = [&R] (((1[&rate=1.0]:0.3,2[&rate=0.9]:0.4)'East Baltic [east2280]':0.2,3:0.6):0.1,(4:0.5,5:0.5):0.7);
tree STATE_1 = [&R] ((1:0.1,2:0.1):0.1,(3:0.1,(4:0.1,5:0.1):0.1):0.1);
End;
"""


@pytest.fixture
def beast_tree(tmp_path: Path) -> Path:
    path = tmp_path / "balto-slavic.trees"
    path.write_text(BEAST_NEXUS)
    return path


@pytest.fixture
def language_geojson(tmp_path: Path) -> Path:
    """Language points identified through properties.language.id; Old Prussian is absent."""
    features = [
        point_feature(None, 24.1, 56.9, language_id="latv1249"),
        point_feature(None, 23.9, 54.7, language_id="lith1251"),
        point_feature(None, 19.0, 52.1, language_id="poli1260"),
        point_feature(None, 15.5, 49.8, language_id="czec1258"),
        point_feature(None, 24.5, 55.5, language_id="east2280"),
        point_feature(None, 37.6, 55.8, language_id="russ1263"),
    ]
    path = tmp_path / "balto-slavic.geojson"
    path.write_text(json.dumps({"type": "FeatureCollection", "features": features}))
    return path


class TestBeastNexus:

    def test_conversion(self, beast_tree: Path, language_geojson: Path) -> None:
        geo = convert(beast_tree, language_geojson)

        assert geo.name == "balto-slavic"
        assert geo.tree.leaf_count == 5
        assert len(geo.sites) == geo.tree.leaf_count
        assert geo.tree.leaf_names() == ["latv1249", "lith1251", "east2280", "poli1260", "czec1258"]

    def test_located_ancestor_becomes_zero_length_leaf(self, beast_tree: Path, language_geojson: Path) -> None:
        geo = convert(beast_tree, language_geojson)

        ancestor = geo.tree.leaves_in_index_order()[2]
        assert ancestor.taxon_name == "east2280"
        assert ancestor.branch_length == 0.0

    def test_unlocated_sibling_is_merged_away(self, beast_tree: Path, language_geojson: Path) -> None:
        geo = convert(beast_tree, language_geojson)

        baltic = geo.tree.root.left
        assert baltic is not None
        # 0.1 above the pruned Old Prussian split plus 0.2 of East Baltic
        assert baltic.branch_length == pytest.approx(0.3)
        assert {leaf.taxon_name for leaf in baltic.iter_leaves()} == {"latv1249", "lith1251", "east2280"}

    def test_internal_ids_follow_leaves(self, beast_tree: Path, language_geojson: Path) -> None:
        geo = convert(beast_tree, language_geojson)

        internal_ids = sorted(v.id for v in geo.tree.iter_vertices() if not v.is_leaf)
        assert internal_ids == [6, 7, 8, 9]
        assert geo.tree.root.id == 9

    def test_sites_are_inside_padded_canvas(self, beast_tree: Path, language_geojson: Path) -> None:
        config = ConversionConfig(canvas_width=1000, canvas_height=600)
        geo = convert(beast_tree, language_geojson, config)

        for site in geo.sites:
            assert 100.0 - 1e-9 <= site.x <= 900.0 + 1e-9
            assert 60.0 - 1e-9 <= site.y <= 540.0 + 1e-9

        latvian, lithuanian, _, polish, czech = geo.sites
        assert latvian.y < lithuanian.y < polish.y < czech.y
        assert czech.x < polish.x < latvian.x

    def test_only_first_tree_is_used(self, beast_tree: Path, language_geojson: Path) -> None:
        geo = convert(beast_tree, language_geojson)
        assert geo.tree.root.right is not None
        assert geo.tree.root.right.branch_length == 0.7


class TestFailures:

    def test_projector_names_missing_taxon(self) -> None:
        parsed = parse_tree_text("(A:1,(B:1,D:1):1);")
        tree = build_tree(parsed.root, parsed.translate)
        points = {"A": GeoPoint(0.0, 0.0), "B": GeoPoint(10.0, 5.0)}

        with pytest.raises(MissingGeoIdsError) as exc_info:
            project_sites(tree, points, 800, 500)
        assert exc_info.value.missing == ["D"]

    def test_disjoint_inputs(self, tmp_path: Path, language_geojson: Path) -> None:
        tree = tmp_path / "romance.nwk"
        tree.write_text("((French,Italian),Spanish);")
        with pytest.raises(NoGeoMatchedTaxaError) as exc_info:
            convert(tree, language_geojson)
        assert exc_info.value.num_leaves == 3
        assert exc_info.value.num_points == 6
