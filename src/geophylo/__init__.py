"""
Geophylo: pair phylogenetic tree leaves with map positions.

Parses a Newick or NEXUS tree, prunes it to the taxa located in a GeoJSON
point collection, folds it into a binary tree and projects every leaf onto
a drawing canvas. The result is the input for leaf-ordering and drawing
tools for geophylogenies.
"""

__version__ = "0.1.0"
__author__ = "Geophylo Team"

from geophylo.core.pipeline import convert, convert_text, parse_tree_text
from geophylo.models.config import ConversionConfig
from geophylo.models.tree import Geophylogeny, Site, Tree, Vertex

__all__ = [
    "ConversionConfig",
    "Geophylogeny",
    "Site",
    "Tree",
    "Vertex",
    "__version__",
    "convert",
    "convert_text",
    "parse_tree_text",
]
