"""Resolve raw tree labels to taxon identifiers."""

from __future__ import annotations

import re
from collections.abc import Mapping

# First [bracketed] annotation of a label, e.g. 'Old Prussian [prus1238]'
TAXON_ID_PATTERN = re.compile(r"\[([^\]]+)\]")


def resolve_label(raw_label: str | None, translate: Mapping[str, str]) -> str | None:
    """Map a raw label through the NEXUS translate table.

    Args:
        raw_label: Label as parsed, or None.
        translate: Translate table (empty for plain Newick).

    Returns:
        The translated name if the trimmed label is a table key, otherwise
        the trimmed label; None for None.
    """
    if raw_label is None:
        return None
    trimmed = raw_label.strip()
    return translate.get(trimmed, trimmed)


def extract_taxon_id(label: str | None) -> str | None:
    """Return the first bracketed annotation of a label, or the trimmed label.

    Example:
        >>> extract_taxon_id("Latvian [latv1249]")
        'latv1249'
        >>> extract_taxon_id("  Lithuanian ")
        'Lithuanian'
    """
    if label is None:
        return None
    match = TAXON_ID_PATTERN.search(label)
    if match:
        return match.group(1)
    return label.strip()


def taxon_id_for(raw_label: str | None, translate: Mapping[str, str]) -> str | None:
    """Resolve a raw label and extract its taxon id in one step."""
    return extract_taxon_id(resolve_label(raw_label, translate))
