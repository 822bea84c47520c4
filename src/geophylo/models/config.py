"""
Pydantic configuration model for a tree + GeoJSON conversion.

Configuration can be loaded from a YAML file and overridden by CLI
arguments. The YAML layout groups the canvas settings:

    tree_name: balto-slavic
    canvas:
      width: 800
      height: 500
      padding: 0.1
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, Field

from geophylo.core.constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_PADDING_FRACTION,
)

logger = logging.getLogger(__name__)

# YAML canvas keys -> model fields
_CANVAS_KEYS = {
    "width": "canvas_width",
    "height": "canvas_height",
    "padding": "padding_fraction",
}


class ConversionConfig(BaseModel):
    """Settings for laying out one geophylogeny."""

    canvas_width: int = Field(
        default=DEFAULT_CANVAS_WIDTH,
        gt=0,
        description="Canvas width in drawing units",
    )
    canvas_height: int = Field(
        default=DEFAULT_CANVAS_HEIGHT,
        gt=0,
        description="Canvas height in drawing units",
    )
    padding_fraction: float = Field(
        default=DEFAULT_PADDING_FRACTION,
        ge=0.0,
        lt=0.5,
        description=(
            "Fraction of the canvas width and height reserved as padding on "
            "each side. Must stay below 0.5 so some drawing area remains."
        ),
    )
    tree_name: str | None = Field(
        default=None,
        description="Display name of the tree; defaults to the tree file stem",
    )

    model_config = {"frozen": True}

    def with_overrides(self, **overrides: Any) -> Self:
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        if not values:
            return self
        return self.model_validate({**self.model_dump(), **values})

    @classmethod
    def from_yaml(cls, path: Path) -> Self:
        """
        Load configuration from a YAML file.

        Unknown keys are ignored (forward compatibility). The nested
        ``canvas`` section is flattened onto the model fields.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ConversionConfig populated from YAML values merged with defaults.

        Raises:
            FileNotFoundError: If YAML file does not exist.
            ValueError: If the YAML is not a mapping or holds invalid values.
        """
        import yaml

        raw = yaml.safe_load(path.read_text())
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            msg = f"YAML config must be a mapping, got {type(raw).__name__}"
            raise ValueError(msg)

        flat = _flatten_yaml_config(raw)
        return cls(**flat)

    def to_yaml(self, path: Path) -> None:
        """Write configuration to a YAML file."""
        path.write_text(self.to_yaml_str())

    def to_yaml_str(self) -> str:
        """Serialize configuration to a YAML string with a canvas section."""
        import yaml

        data: dict[str, Any] = {}
        if self.tree_name is not None:
            data["tree_name"] = self.tree_name
        data["canvas"] = {
            yaml_key: getattr(self, field_name) for yaml_key, field_name in _CANVAS_KEYS.items()
        }
        return yaml.dump(data, default_flow_style=False, sort_keys=False)


def _flatten_yaml_config(raw: dict[str, Any]) -> dict[str, Any]:
    """Map the nested YAML layout to flat ConversionConfig fields."""
    flat: dict[str, Any] = {}
    fields = ConversionConfig.model_fields

    for key, value in raw.items():
        if key == "canvas" and isinstance(value, dict):
            for canvas_key, canvas_value in value.items():
                if canvas_key in _CANVAS_KEYS:
                    flat[_CANVAS_KEYS[canvas_key]] = canvas_value
                else:
                    logger.debug(f"Ignoring unknown canvas key: {canvas_key}")
        elif key in fields:
            flat[key] = value
        else:
            logger.debug(f"Ignoring unknown config key: {key}")

    return flat
