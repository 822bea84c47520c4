"""
CLI commands for geophylo.

Provides the command-line interface for converting tree and GeoJSON
inputs, inspecting tree files and managing configuration.
"""

__all__ = ["config", "convert", "main"]
