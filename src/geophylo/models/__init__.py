"""
Data models for geophylo.

Provides the binary tree / site output model and the conversion
configuration.
"""

from geophylo.models.tree import Geophylogeny, Site, Tree, Vertex
from geophylo.models.config import ConversionConfig

__all__ = [
    "ConversionConfig",
    "Geophylogeny",
    "Site",
    "Tree",
    "Vertex",
]
