"""
Binary tree and site models handed to ordering and drawing code.

A ``Tree`` owns a strictly binary ``Vertex`` hierarchy whose leaves are
numbered 1..n and whose internal vertices continue from n+1. Each leaf is
paired with one ``Site``, a canvas position that refers back to its leaf
without owning it. ``Geophylogeny`` bundles both with the canvas size.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(eq=False)
class Vertex:
    """Node of a binary tree.

    Attributes:
        id: Vertex identifier; leaves use 1..n, internal vertices n+1...
        taxon_name: Taxon id for leaves, and for internal vertices whose
            source node was labelled.
        branch_length: Length of the incoming branch, None if unknown.
        children: Either empty (leaf) or exactly two vertices.
    """

    id: int
    taxon_name: str | None = None
    branch_length: float | None = None
    children: list[Vertex] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.children) not in (0, 2):
            msg = f"Vertex {self.id} must have 0 or 2 children, got {len(self.children)}"
            raise ValueError(msg)

    @classmethod
    def join(cls, vertex_id: int, left: Vertex, right: Vertex) -> Vertex:
        """Create an internal vertex over two subtrees."""
        return cls(id=vertex_id, children=[left, right])

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def left(self) -> Vertex | None:
        return self.children[0] if self.children else None

    @property
    def right(self) -> Vertex | None:
        return self.children[1] if self.children else None

    def swap_children(self) -> None:
        """Flip the left-right order of the two children."""
        if self.children:
            self.children.reverse()

    def iter_preorder(self) -> Iterator[Vertex]:
        stack = [self]
        while stack:
            vertex = stack.pop()
            yield vertex
            stack.extend(reversed(vertex.children))

    def iter_leaves(self) -> Iterator[Vertex]:
        """Yield leaves in the current left-right order."""
        return (vertex for vertex in self.iter_preorder() if vertex.is_leaf)

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "internal"
        return f"Vertex(id={self.id}, {kind}, taxon_name={self.taxon_name!r})"


@dataclass(eq=False)
class Tree:
    """Binary tree with a display name."""

    root: Vertex
    leaf_count: int
    name: str = ""

    def iter_vertices(self) -> Iterator[Vertex]:
        return self.root.iter_preorder()

    def leaves_in_index_order(self) -> list[Vertex]:
        """Return leaves so that the leaf with id i sits at position i - 1."""
        return sorted(self.root.iter_leaves(), key=lambda leaf: leaf.id)

    def leaf_names(self) -> list[str | None]:
        return [leaf.taxon_name for leaf in self.leaves_in_index_order()]


@dataclass
class Site:
    """Canvas position associated with one tree leaf."""

    x: float
    y: float
    leaf: Vertex | None = field(default=None, repr=False, compare=False)


@dataclass(eq=False)
class Geophylogeny:
    """A tree, one site per leaf, and the canvas they were laid out on.

    ``sites[i]`` belongs to the leaf with id ``i + 1``.
    """

    tree: Tree
    sites: list[Site]
    width: int
    height: int
    name: str

    def site_for(self, leaf: Vertex) -> Site:
        """Return the site of a leaf.

        Raises:
            KeyError: If the vertex is not a leaf of this tree.
        """
        if leaf.is_leaf and 1 <= leaf.id <= len(self.sites):
            site = self.sites[leaf.id - 1]
            if site.leaf is leaf:
                return site
        raise KeyError(f"No site for vertex {leaf.id}")
