"""Configuration management for DJ Export."""

from typing import Optional, Dict, Any
from pathlib import Path
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings
import yaml
import logging
import os

# Suppress python-dotenv warnings for YAML configuration files
os.environ.setdefault("DOTENV_PROPAGATE_WARNINGS", "false")

logger = logging.getLogger(__name__)


class SpotifyConfig(BaseModel):
    """Spotify Web API credentials."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    market: Optional[str] = None  # ISO country code passed to playlist reads


class LookupConfig(BaseModel):
    """Per-endpoint batching for the metadata lookups.

    Each endpoint has its own limit: audio features accept at most 100 ids
    per call, tracks and artists 50.
    """

    audio_features_batch_size: int = Field(default=100, ge=1, le=100)
    isrc_batch_size: int = Field(default=50, ge=1, le=50)
    genre_batch_size: int = Field(default=50, ge=1, le=50)
    batch_delay: float = Field(default=0.0, ge=0.0)  # Seconds between batches of one lookup


class CacheConfig(BaseModel):
    """Artist genre cache bounds. Unset means unbounded / never expires."""

    genre_max_size: Optional[int] = Field(default=None, ge=1)
    genre_ttl: Optional[float] = Field(default=None, gt=0)  # Seconds


class ExportConfig(BaseModel):
    """Output options."""

    output_dir: str = "."


class DJExportConfig(BaseSettings):
    """Main DJ Export configuration."""

    spotify: SpotifyConfig = Field(default_factory=SpotifyConfig)
    lookups: LookupConfig = Field(default_factory=LookupConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    class Config:
        """Pydantic settings config."""

        # Don't use env_file - we load YAML manually via from_file()
        env_ignore_empty = True

    @classmethod
    def default(cls) -> "DJExportConfig":
        """Build a configuration with every section at its defaults."""
        return cls()

    @classmethod
    def from_file(cls, config_path: str | Path = "djexport.yaml") -> "DJExportConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f) or {}

        spotify_config = config_dict.get("spotify", {})
        lookups_config = config_dict.get("lookups", {})
        cache_config = config_dict.get("cache", {})
        export_config = config_dict.get("export", {})

        return cls(
            spotify=SpotifyConfig(**spotify_config) if spotify_config else SpotifyConfig(),
            lookups=LookupConfig(**lookups_config) if lookups_config else LookupConfig(),
            cache=CacheConfig(**cache_config) if cache_config else CacheConfig(),
            export=ExportConfig(**export_config) if export_config else ExportConfig(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "spotify": self.spotify.model_dump(),
            "lookups": self.lookups.model_dump(),
            "cache": self.cache.model_dump(),
            "export": self.export.model_dump(),
        }

    def to_yaml(self) -> str:
        """Convert configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False)

    def save(self, path: str | Path = "djexport.yaml") -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            f.write(self.to_yaml())

        logger.info(f"Configuration saved to {path}")


def get_config_value(config: DJExportConfig, path: str, default: Any = None) -> Any:
    """Get a nested config value using dot notation."""
    keys = path.split(".")
    current = config.model_dump()

    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default

    return current
