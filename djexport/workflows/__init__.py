"""Export workflows."""

from djexport.workflows.export import export_playlist, run_export

__all__ = ["export_playlist", "run_export"]
