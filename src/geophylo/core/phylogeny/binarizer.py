"""Fold an n-ary parse tree into a strictly binary Tree.

Leaves get identifiers 1..n. If every leaf label is a positive integer
and the labels are exactly 1..n, those numbers are kept; otherwise leaves
are numbered in left-to-right order. Internal vertices are numbered from
n+1 in the order they are created. A node with k > 2 children becomes a
left-leaning chain of k-1 binary vertices, and only the topmost of them
inherits the node's branch length and label.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping

from geophylo.core.exceptions import MalformedTreeError
from geophylo.core.phylogeny.labels import taxon_id_for
from geophylo.core.phylogeny.newick import ParseNode
from geophylo.core.phylogeny.pruning import merge_lengths
from geophylo.models.tree import Tree, Vertex

logger = logging.getLogger(__name__)

_NUMERIC_LABEL = re.compile(r"[0-9]+")


def assign_leaf_ids(leaves: list[ParseNode]) -> list[int]:
    """Choose identifiers for leaves given in traversal order.

    Example:
        >>> assign_leaf_ids([ParseNode(label="3"), ParseNode(label="1"), ParseNode(label="2")])
        [3, 1, 2]
        >>> assign_leaf_ids([ParseNode(label="3"), ParseNode(label="1"), ParseNode(label="4")])
        [1, 2, 3]
    """
    labels = [(leaf.label or "").strip() for leaf in leaves]
    if labels and all(_NUMERIC_LABEL.fullmatch(label) for label in labels):
        numbers = [int(label) for label in labels]
        if sorted(numbers) == list(range(1, len(leaves) + 1)):
            return numbers
        logger.debug("Numeric leaf labels are not exactly 1..n; numbering sequentially")
    return list(range(1, len(leaves) + 1))


class _Builder:
    def __init__(self, leaf_ids: list[int], translate: Mapping[str, str]):
        self._leaf_ids: Iterator[int] = iter(leaf_ids)
        self._next_internal_id = len(leaf_ids) + 1
        self._translate = translate

    def build(self, node: ParseNode) -> Vertex:
        if node.is_leaf:
            leaf = Vertex(
                id=next(self._leaf_ids),
                taxon_name=taxon_id_for(node.label, self._translate),
                branch_length=node.length,
            )
            return leaf

        if len(node.children) == 1:
            only = self.build(node.children[0])
            only.branch_length = merge_lengths(node.length, only.branch_length)
            return only

        current = self.build(node.children[0])
        for child in node.children[1:]:
            right = self.build(child)
            current = Vertex.join(self._next_internal_id, current, right)
            self._next_internal_id += 1

        current.branch_length = node.length
        taxon_id = taxon_id_for(node.label, self._translate)
        if taxon_id and taxon_id.strip():
            current.taxon_name = taxon_id
        return current


def build_tree(root: ParseNode, translate: Mapping[str, str], name: str = "") -> Tree:
    """Build a binary Tree from a (pruned) parse tree.

    Args:
        root: Root of the parse tree.
        translate: NEXUS translate table (empty for plain Newick).
        name: Display name of the tree.

    Returns:
        Tree whose leaves are numbered 1..leaf_count.

    Raises:
        MalformedTreeError: If the result does not have exactly one leaf
            vertex per identifier 1..leaf_count.
    """
    leaves = list(root.iter_leaves())
    leaf_ids = assign_leaf_ids(leaves)
    vertex = _Builder(leaf_ids, translate).build(root)

    found = sorted(leaf.id for leaf in vertex.iter_leaves())
    if found != list(range(1, len(leaves) + 1)):
        raise MalformedTreeError(
            f"expected leaf ids 1..{len(leaves)}, built {len(found)} leaves"
        )

    tree = Tree(root=vertex, leaf_count=len(leaves), name=name)
    logger.info(
        f"Built binary tree '{name}' with {tree.leaf_count} leaves "
        f"and {tree.leaf_count - 1} internal vertices"
    )
    return tree
