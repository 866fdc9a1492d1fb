"""
Page Navigation Config Loader

Seed tiles, new-tile defaults and page bodies for the tile strip.
"""

from pathlib import Path
from typing import Dict, List, Optional
from functools import lru_cache

from pydantic import BaseModel, Field, ConfigDict, ValidationError, field_validator

from . import ConfigValidationError, get_config_root, load_yaml


class SeedTile(BaseModel):
    """One tile of the initial strip."""
    id: str = Field(..., min_length=1, description="Stable tile id")
    label: str = Field(..., description="Display label")
    content: Optional[str] = Field(default=None, description="Page body shown while active")

    model_config = ConfigDict(frozen=True)


DEFAULT_SEED = [
    SeedTile(id="info", label="Info", content="This is the Info section content."),
    SeedTile(id="details", label="Details", content="This is the Details section content."),
    SeedTile(id="other", label="Other", content="This is the Other section content."),
    SeedTile(id="ending", label="Ending", content="This is the Ending section content."),
]


class PageNavConfig(BaseModel):
    """Tile strip configuration."""

    version: str = Field(default="1.0", description="Config schema version")
    seed: List[SeedTile] = Field(default_factory=lambda: list(DEFAULT_SEED), description="Initial tiles in order")
    new_tile_label: str = Field(default="New Page", description="Label given to tiles inserted at a gap")
    id_prefix: str = Field(default="new", min_length=1, description="Prefix for generated tile ids")
    missing_content_template: str = Field(
        default="No content for {label}.",
        description="Body shown for tiles without registered content",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator('seed')
    @classmethod
    def validate_unique_ids(cls, v: List[SeedTile]) -> List[SeedTile]:
        """Seed ids must be unique."""
        seen = set()
        for tile in v:
            if tile.id in seen:
                raise ValueError(f"Duplicate seed tile id: {tile.id}")
            seen.add(tile.id)
        return v

    @field_validator('missing_content_template')
    @classmethod
    def validate_template(cls, v: str) -> str:
        try:
            v.format(label="x", id="x")
        except (KeyError, IndexError) as e:
            raise ValueError(f"Template may only use {{label}} and {{id}}: {e}")
        return v

    def get_content_map(self) -> Dict[str, str]:
        """Tile id -> body for seed tiles that define one."""
        return {tile.id: tile.content for tile in self.seed if tile.content is not None}


def get_page_nav_path(filename: str = "page_nav.yaml") -> Path:
    """Get path to the page navigation config file."""
    return get_config_root() / filename


@lru_cache(maxsize=4)
def load_page_nav_config(path: Optional[Path] = None) -> PageNavConfig:
    """
    Load page navigation config from YAML file.

    Args:
        path: Optional path to config YAML file.
              Defaults to configs/page_nav.yaml; if that file does not
              exist the built-in defaults are returned.

    Returns:
        PageNavConfig instance

    Raises:
        ConfigError: If loading or validation fails (ConfigValidationError
            for schema violations)
    """
    if path is None:
        path = get_page_nav_path()
        if not path.exists():
            return PageNavConfig()

    data = load_yaml(path)
    try:
        return PageNavConfig(**data)
    except ValidationError as e:
        raise ConfigValidationError(f"Failed to validate page navigation config at {path}: {e}")
