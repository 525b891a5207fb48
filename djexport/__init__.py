"""DJ Export - Spotify playlist to DJ-software CSV exporter."""

__version__ = "0.1.0"

from djexport.app import DJExport
from djexport.models import TrackRecord
from djexport.config import DJExportConfig

__all__ = ["DJExport", "TrackRecord", "DJExportConfig"]
