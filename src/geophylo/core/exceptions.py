"""
Custom exceptions with actionable guidance.

Every stage of the conversion fails closed: nothing partial is handed on,
and each error carries the identifiers or character offsets needed to fix
the input, together with a suggestion for resolution.
"""

from __future__ import annotations

from collections.abc import Sequence


class GeophyloError(Exception):
    """Base exception for geophylo errors."""

    def __init__(self, message: str, suggestion: str | None = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


def _format_ids(ids: Sequence[str], limit: int = 10) -> str:
    shown = ", ".join(ids[:limit])
    if len(ids) > limit:
        shown += f"... and {len(ids) - limit} more"
    return shown


# =============================================================================
# Tree text syntax
# =============================================================================


class TreeSyntaxError(GeophyloError):
    """Raised when tree text is not valid Newick."""

    def __init__(self, message: str, position: int):
        super().__init__(
            message=f"{message} at position {position}",
            suggestion=(
                "Check the tree text around the reported character offset. "
                "Parentheses must balance, labels containing delimiters "
                "(:,()[]; or whitespace) must be single-quoted and comments "
                "in [...] must be closed."
            ),
        )
        self.position = position


# =============================================================================
# Input data
# =============================================================================


class InputDataError(GeophyloError):
    """Base class for unusable input documents."""


class EmptyTreeTextError(InputDataError):
    """Raised when the tree text is empty or blank."""

    def __init__(self, source: str):
        super().__init__(
            message=f"Tree text is empty: {source}",
            suggestion=(
                "Provide a Newick string terminated by ';' or a NEXUS file "
                "with a 'tree <name> = <newick>;' statement."
            ),
        )
        self.source = source


class NexusTreeNotFoundError(InputDataError):
    """Raised when a NEXUS document has no tree statement."""

    def __init__(self, source: str):
        super().__init__(
            message=f"No tree statement found in NEXUS input: {source}",
            suggestion=(
                "The TREES block must contain a line starting with 'tree' "
                "followed by '=' and a Newick string, e.g.\n"
                "  tree STATE_0 = (1:0.5,(2:0.2,3:0.3):0.1);"
            ),
        )
        self.source = source


class InvalidGeoJsonError(InputDataError):
    """Raised when the GeoJSON document cannot be read as a JSON object."""

    def __init__(self, source: str, detail: str):
        super().__init__(
            message=f"GeoJSON document {source} is not usable: {detail}",
            suggestion="Validate the file with a JSON linter; the top level must be an object.",
        )
        self.source = source


class MissingFeaturesError(InputDataError):
    """Raised when the GeoJSON document has no 'features' array."""

    def __init__(self, source: str):
        super().__init__(
            message=f"GeoJSON missing 'features' array: {source}",
            suggestion=(
                "The document must be a FeatureCollection whose 'features' "
                "array holds Point features identified by 'id' or "
                "'properties.language.id'."
            ),
        )
        self.source = source


# =============================================================================
# Tree structure
# =============================================================================


class TreeStructureError(GeophyloError):
    """Base class for trees that cannot be turned into a layout."""


class NoGeoMatchedTaxaError(TreeStructureError):
    """Raised when pruning removes every taxon of the tree."""

    def __init__(self, num_leaves: int, num_points: int):
        super().__init__(
            message=(
                f"All taxa were pruned: none of the {num_leaves} tree leaves "
                f"matched any of the {num_points} GeoJSON ids"
            ),
            suggestion=(
                "Tree labels are matched against GeoJSON ids after applying "
                "the NEXUS translate table and taking the first [bracketed] "
                "annotation as the id. Check that both files use the same "
                "identifier scheme."
            ),
        )
        self.num_leaves = num_leaves
        self.num_points = num_points


class TreeTooDeepError(TreeStructureError):
    """Raised when a tree nests deeper than the interpreter can recurse."""

    def __init__(self, source: str):
        super().__init__(
            message=f"Tree is nested too deeply to process: {source}",
            suggestion=(
                "Parsing, pruning and binarization recurse once per nesting "
                "level. Trees of a few hundred levels are supported; resolve "
                "long caterpillar chains or raise sys.setrecursionlimit."
            ),
        )
        self.source = source


class MalformedTreeError(TreeStructureError):
    """Raised when a parse tree cannot be folded into a binary tree."""

    def __init__(self, detail: str):
        super().__init__(
            message=f"Malformed tree: {detail}",
            suggestion="Re-export the tree from the source program and check it parses cleanly.",
        )


# =============================================================================
# Geographic consistency
# =============================================================================


class ConsistencyError(GeophyloError):
    """Base class for disagreements between tree and geographic data."""


class EmptyPointIndexError(ConsistencyError):
    """Raised when bounds are requested for an empty point index."""

    def __init__(self) -> None:
        super().__init__(
            message="No Point features found in GeoJSON",
            suggestion="Add Point features with [longitude, latitude] coordinates.",
        )


class DegenerateBoundsError(ConsistencyError):
    """Raised when all points share one longitude or one latitude."""

    def __init__(self, min_x: float, max_x: float, min_y: float, max_y: float):
        super().__init__(
            message=(
                "GeoJSON points have zero extent (all same lon or lat): "
                f"x=[{min_x:.6f}, {max_x:.6f}], y=[{min_y:.6f}, {max_y:.6f}]"
            ),
            suggestion=(
                "The layout scales the bounding box of all points to the "
                "canvas, so points must differ in both longitude and latitude."
            ),
        )
        self.bounds = (min_x, max_x, min_y, max_y)


class MissingGeoIdsError(ConsistencyError):
    """Raised when tree leaves have no entry in the point index."""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(
            message=f"Missing GeoJSON ids for taxa: {_format_ids(self.missing)}",
            suggestion=(
                f"{len(self.missing)} leaves have no Point feature. Add the "
                "features or remove the taxa from the tree."
            ),
        )


class BlankTaxonLabelError(ConsistencyError):
    """Raised when a leaf carries no taxon label."""

    def __init__(self, leaf_id: int):
        super().__init__(
            message=f"Leaf {leaf_id} has no taxon label",
            suggestion="Every leaf needs a label that matches a GeoJSON id.",
        )
        self.leaf_id = leaf_id
