"""Unit tests for custom exceptions module."""

import pytest

from geophylo.core.exceptions import (
    BlankTaxonLabelError,
    ConsistencyError,
    DegenerateBoundsError,
    EmptyPointIndexError,
    EmptyTreeTextError,
    GeophyloError,
    InputDataError,
    InvalidGeoJsonError,
    MalformedTreeError,
    MissingFeaturesError,
    MissingGeoIdsError,
    NexusTreeNotFoundError,
    NoGeoMatchedTaxaError,
    TreeStructureError,
    TreeSyntaxError,
    TreeTooDeepError,
)


class TestGeophyloError:
    """Tests for base exception class."""

    def test_basic_message(self):
        error = GeophyloError("Test error")
        assert error.message == "Test error"
        assert error.suggestion is None
        assert str(error) == "Test error"

    def test_message_with_suggestion(self):
        error = GeophyloError("Test error", suggestion="Try this fix")
        assert error.full_message == "Test error\n\nSuggestion: Try this fix"
        assert "Suggestion: Try this fix" in str(error)


class TestHierarchy:
    """Every error belongs to one of the three failure families."""

    @pytest.mark.parametrize(
        ("error", "family"),
        [
            (TreeSyntaxError("Expected ')'", 4), GeophyloError),
            (EmptyTreeTextError("t.nwk"), InputDataError),
            (NexusTreeNotFoundError("t.nex"), InputDataError),
            (InvalidGeoJsonError("p.geojson", "bad"), InputDataError),
            (MissingFeaturesError("p.geojson"), InputDataError),
            (NoGeoMatchedTaxaError(3, 2), TreeStructureError),
            (MalformedTreeError("bad"), TreeStructureError),
            (TreeTooDeepError("deep.nwk"), TreeStructureError),
            (EmptyPointIndexError(), ConsistencyError),
            (DegenerateBoundsError(0.1, 0.1, 0.0, 1.0), ConsistencyError),
            (MissingGeoIdsError(["D"]), ConsistencyError),
            (BlankTaxonLabelError(2), ConsistencyError),
        ],
    )
    def test_family(self, error: GeophyloError, family: type) -> None:
        assert isinstance(error, family)
        assert error.suggestion


class TestDetails:
    """Errors carry the data needed to fix the input."""

    def test_syntax_error_position(self):
        error = TreeSyntaxError("Expected ')'", 4)
        assert error.position == 4
        assert error.message == "Expected ')' at position 4"

    def test_missing_ids_are_listed(self):
        error = MissingGeoIdsError(["D", "E"])
        assert error.missing == ["D", "E"]
        assert "D, E" in error.message
        assert "2 leaves" in error.suggestion

    def test_long_missing_list_is_truncated(self):
        error = MissingGeoIdsError([f"t{i}" for i in range(15)])
        assert len(error.missing) == 15
        assert "and 5 more" in error.message
        assert "t14" not in error.message

    def test_degenerate_bounds(self):
        error = DegenerateBoundsError(0.1, 0.1, 0.0, 1.0)
        assert error.bounds == (0.1, 0.1, 0.0, 1.0)
        assert "zero extent" in str(error)

    def test_no_matched_taxa_counts(self):
        error = NoGeoMatchedTaxaError(num_leaves=12, num_points=7)
        assert "12 tree leaves" in error.message
        assert "7 GeoJSON ids" in error.message

    def test_blank_label_leaf(self):
        assert BlankTaxonLabelError(5).leaf_id == 5
