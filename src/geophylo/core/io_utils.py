"""
Site table export.

The site table has one row per leaf in leaf index order, so row ``i``
describes the leaf with id ``i + 1`` and its canvas position. It is
written as CSV or zstd-compressed Parquet through polars.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import polars as pl

if TYPE_CHECKING:
    from geophylo.models.tree import Geophylogeny

logger = logging.getLogger(__name__)

SiteTableFormat = Literal["csv", "parquet"]

SITE_TABLE_SCHEMA = {
    "leaf_id": pl.Int64,
    "taxon": pl.Utf8,
    "x": pl.Float64,
    "y": pl.Float64,
}


def sites_to_dataframe(geophylogeny: Geophylogeny) -> pl.DataFrame:
    """
    Tabulate leaves and their canvas positions.

    Args:
        geophylogeny: Converted tree and sites.

    Returns:
        DataFrame with columns leaf_id, taxon, x, y.
    """
    leaves = geophylogeny.tree.leaves_in_index_order()
    return pl.DataFrame(
        {
            "leaf_id": [leaf.id for leaf in leaves],
            "taxon": [leaf.taxon_name for leaf in leaves],
            "x": [site.x for site in geophylogeny.sites],
            "y": [site.y for site in geophylogeny.sites],
        },
        schema=SITE_TABLE_SCHEMA,
    )


def write_site_table(
    geophylogeny: Geophylogeny,
    path: Path,
    table_format: SiteTableFormat = "csv",
) -> pl.DataFrame:
    """
    Write the site table of a geophylogeny.

    Parent directories are created as needed.

    Returns:
        The DataFrame that was written.
    """
    df = sites_to_dataframe(geophylogeny)
    path.parent.mkdir(parents=True, exist_ok=True)
    if table_format == "parquet":
        df.write_parquet(path, compression="zstd")
    else:
        df.write_csv(path)
    logger.info(f"Wrote {df.height} site rows to {path}")
    return df


def read_site_table(path: Path) -> pl.DataFrame:
    """Read a site table, choosing the reader by file suffix."""
    if path.suffix == ".parquet":
        return pl.read_parquet(path)
    return pl.read_csv(path, schema_overrides=SITE_TABLE_SCHEMA)
