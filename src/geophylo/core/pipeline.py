"""
Convert a tree file and a GeoJSON file into a Geophylogeny.

Stages, in order:
    1. Parse the tree text (Newick, or NEXUS with a translate table).
    2. Load the GeoJSON point index.
    3. Prune the tree to taxa that have a point.
    4. Fold the pruned tree into a binary Tree.
    5. Project every leaf onto the canvas.

Each stage fails closed with a GeophyloError; nothing partial is returned.
Conversions share no state, so independent conversions may run on
separate threads.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, NamedTuple

from geophylo.core.constants import DEFAULT_TREE_NAME, NEXUS_HEADER
from geophylo.core.exceptions import EmptyTreeTextError, TreeTooDeepError
from geophylo.core.geography.points import GeoPoint, load_point_index, read_point_index
from geophylo.core.geography.projection import project_sites
from geophylo.core.phylogeny.binarizer import build_tree
from geophylo.core.phylogeny.newick import ParseNode, parse_newick
from geophylo.core.phylogeny.nexus import EMPTY_TRANSLATE, TranslateTable, scan_nexus
from geophylo.core.phylogeny.pruning import prune_to_located
from geophylo.models.config import ConversionConfig
from geophylo.models.tree import Geophylogeny

logger = logging.getLogger(__name__)


class ParsedTree(NamedTuple):
    """Parse result of a tree document."""

    root: ParseNode
    translate: TranslateTable
    is_nexus: bool


def is_nexus(text: str) -> bool:
    """Return True if the text starts with the #NEXUS header."""
    return text.lstrip().lower().startswith(NEXUS_HEADER)


def parse_tree_text(text: str, source: str = "<text>") -> ParsedTree:
    """Parse Newick or NEXUS text.

    Args:
        text: Tree document content.
        source: Name used in error messages.

    Returns:
        ParsedTree with the parse root and translate table (empty for Newick).

    Raises:
        EmptyTreeTextError: If the text is blank.
        NexusTreeNotFoundError: If a NEXUS document has no tree statement.
        TreeSyntaxError: If the Newick text is malformed.
        TreeTooDeepError: If the tree nests beyond the recursion limit.
    """
    if not text.strip():
        raise EmptyTreeTextError(source)

    try:
        if is_nexus(text):
            data = scan_nexus(text.splitlines(), source=source)
            return ParsedTree(parse_newick(data.newick), data.translate, True)
        return ParsedTree(parse_newick(text.strip()), EMPTY_TRANSLATE, False)
    except RecursionError:
        raise TreeTooDeepError(source) from None


def read_tree_file(path: Path) -> ParsedTree:
    """Read and parse a Newick or NEXUS file."""
    text = path.read_text(encoding="utf-8-sig")
    return parse_tree_text(text, source=str(path))


def build_geophylogeny(
    parsed: ParsedTree,
    points: Mapping[str, GeoPoint],
    config: ConversionConfig,
    name: str,
) -> Geophylogeny:
    """Run pruning, binarization and projection on parsed inputs.

    Raises:
        TreeTooDeepError: If the tree nests beyond the recursion limit.
    """
    try:
        pruned = prune_to_located(parsed.root, parsed.translate, points)
        tree = build_tree(pruned, parsed.translate, name=name)
    except RecursionError:
        raise TreeTooDeepError(name) from None
    sites = project_sites(
        tree,
        points,
        config.canvas_width,
        config.canvas_height,
        config.padding_fraction,
    )
    return Geophylogeny(
        tree=tree,
        sites=sites,
        width=config.canvas_width,
        height=config.canvas_height,
        name=name,
    )


def convert_text(
    tree_text: str,
    geojson: Any,
    config: ConversionConfig | None = None,
) -> Geophylogeny:
    """Convert in-memory inputs.

    Args:
        tree_text: Newick or NEXUS text.
        geojson: Decoded GeoJSON document.
        config: Layout settings; defaults to an 800x500 canvas.

    Returns:
        Geophylogeny with one site per leaf.
    """
    config = config or ConversionConfig()
    parsed = parse_tree_text(tree_text)
    points = load_point_index(geojson)
    return build_geophylogeny(parsed, points, config, config.tree_name or DEFAULT_TREE_NAME)


def convert(
    tree_path: Path,
    geojson_path: Path,
    config: ConversionConfig | None = None,
) -> Geophylogeny:
    """Convert a tree file and a GeoJSON file.

    Args:
        tree_path: Newick or NEXUS file.
        geojson_path: GeoJSON FeatureCollection with Point features.
        config: Layout settings; the tree name defaults to the tree file stem.

    Returns:
        Geophylogeny with one site per leaf.

    Raises:
        GeophyloError: From any stage, see geophylo.core.exceptions.
        FileNotFoundError: If an input file does not exist.
    """
    config = config or ConversionConfig()
    parsed = read_tree_file(tree_path)
    points = read_point_index(geojson_path)
    name = config.tree_name or tree_path.stem
    logger.info(
        f"Converting {tree_path.name} ({'NEXUS' if parsed.is_nexus else 'Newick'}) "
        f"with {len(points)} points from {geojson_path.name}"
    )
    return build_geophylogeny(parsed, points, config, name)
