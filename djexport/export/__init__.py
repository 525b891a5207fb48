"""CSV rendering and delivery."""

from djexport.export.encoder import build_filename, encode, field_value
from djexport.export.sinks import FileSink, Notifier

__all__ = ["build_filename", "encode", "field_value", "FileSink", "Notifier"]
