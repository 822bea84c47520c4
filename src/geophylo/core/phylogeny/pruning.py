"""Prune a parse tree down to the taxa that have a geographic location.

Subtrees without any located taxon are removed, single-child chains left
behind are collapsed with their branch lengths summed, and internal nodes
that name a located taxon themselves (e.g. an ancestral language with a
known location) get that taxon attached as an extra zero-length leaf.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from geophylo.core.exceptions import NoGeoMatchedTaxaError
from geophylo.core.phylogeny.labels import taxon_id_for
from geophylo.core.phylogeny.newick import ParseNode

logger = logging.getLogger(__name__)


def merge_lengths(parent_length: float | None, child_length: float | None) -> float | None:
    """Sum two branch lengths, treating a missing one as zero.

    Returns None only when both are missing.
    """
    if parent_length is None:
        return child_length
    if child_length is None:
        return parent_length
    return parent_length + child_length


def prune_node(
    node: ParseNode,
    translate: Mapping[str, str],
    located: Mapping[str, object],
) -> ParseNode | None:
    """Return the pruned copy of ``node``, or None if nothing is left.

    The input tree is not modified.

    Args:
        node: Subtree to prune.
        translate: NEXUS translate table (empty for plain Newick).
        located: Point index keyed by taxon id.
    """
    taxon_id = taxon_id_for(node.label, translate)
    has_geo = taxon_id is not None and taxon_id in located

    if node.is_leaf:
        if has_geo:
            return ParseNode([], node.label, node.length)
        return None

    kept: list[ParseNode] = []
    for child in node.children:
        pruned = prune_node(child, translate, located)
        if pruned is not None:
            kept.append(pruned)

    if has_geo:
        self_leaf = ParseNode([], node.label, 0.0)
        if not kept:
            return self_leaf
        kept.append(self_leaf)
        return ParseNode(kept, None, node.length)

    if not kept:
        return None
    if len(kept) == 1:
        only = kept[0]
        return ParseNode(only.children, only.label, merge_lengths(node.length, only.length))
    return ParseNode(kept, node.label, node.length)


def prune_to_located(
    root: ParseNode,
    translate: Mapping[str, str],
    located: Mapping[str, object],
) -> ParseNode:
    """Prune a whole tree to located taxa.

    Raises:
        NoGeoMatchedTaxaError: If no taxon of the tree has a location.
    """
    pruned = prune_node(root, translate, located)
    num_leaves = sum(1 for _ in root.iter_leaves())
    if pruned is None:
        raise NoGeoMatchedTaxaError(num_leaves=num_leaves, num_points=len(located))

    kept_leaves = sum(1 for _ in pruned.iter_leaves())
    logger.info(f"Pruned tree from {num_leaves} to {kept_leaves} leaves")
    return pruned
