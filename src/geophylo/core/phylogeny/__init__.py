"""Phylogeny module for tree text parsing and tree transforms.

Provides the Newick parser and writer, the NEXUS translate/tree scanner,
label resolution, pruning to located taxa and binarization.
"""

from geophylo.core.phylogeny.binarizer import assign_leaf_ids, build_tree
from geophylo.core.phylogeny.labels import extract_taxon_id, resolve_label
from geophylo.core.phylogeny.newick import ParseNode, parse_newick, to_newick
from geophylo.core.phylogeny.nexus import NexusScanner, parse_translate_entries, scan_nexus
from geophylo.core.phylogeny.pruning import merge_lengths, prune_node, prune_to_located

__all__ = [
    "NexusScanner",
    "ParseNode",
    "assign_leaf_ids",
    "build_tree",
    "extract_taxon_id",
    "merge_lengths",
    "parse_newick",
    "parse_translate_entries",
    "prune_node",
    "prune_to_located",
    "resolve_label",
    "scan_nexus",
    "to_newick",
]
