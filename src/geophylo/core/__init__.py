"""
Core algorithms for building geophylogenies.

This package contains the tree text parsers, the pruning and binarization
transforms, the GeoJSON point index and the canvas projection.
"""

from geophylo.core.geography import compute_bounds, load_point_index, project_sites
from geophylo.core.phylogeny import build_tree, parse_newick, prune_to_located, scan_nexus

__all__ = [
    "build_tree",
    "compute_bounds",
    "load_point_index",
    "parse_newick",
    "project_sites",
    "prune_to_located",
    "scan_nexus",
]
