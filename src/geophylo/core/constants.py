"""
Constants used throughout the geophylo package.

Centralizes grammar characters, projection limits and layout defaults
so the parser, projector and configuration agree on them.
"""

from __future__ import annotations

# =============================================================================
# Newick Grammar
# =============================================================================

# Characters that end a bare (unquoted) label, in addition to whitespace
NEWICK_DELIMITERS = frozenset(":,()[];")

# Characters allowed inside a numeric branch length span
BRANCH_LENGTH_CHARS = frozenset("0123456789.+-eE")

QUOTE = "'"
COMMENT_OPEN = "["
COMMENT_CLOSE = "]"
TREE_TERMINATOR = ";"

# First token of a NEXUS document
NEXUS_HEADER = "#nexus"

# =============================================================================
# Projection
# =============================================================================

# Latitude cutoff of spherical Web-Mercator (EPSG:3857), in degrees
MAX_MERCATOR_LATITUDE = 85.05112878

# =============================================================================
# Layout Defaults
# =============================================================================

DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 500

# Fraction of the canvas reserved as padding on each side
DEFAULT_PADDING_FRACTION = 0.10

# Display name used when neither a name nor a tree file is available
DEFAULT_TREE_NAME = "tree"
