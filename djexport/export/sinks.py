"""Where export notices and files go."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

logger = logging.getLogger("djexport.export")

NOTICE_PREFIX = "Export DJ CSV:"


class Notifier:
    """User-facing notices, mirrored to the log."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def notify(self, message: str, is_error: bool = False) -> None:
        text = f"{NOTICE_PREFIX} {message}"
        if is_error:
            logger.warning(text)
            self.console.print(f"[red]✗[/red] {text}")
        else:
            logger.info(text)
            self.console.print(f"[green]✓[/green] {text}")


class FileSink:
    """Writes exported files into a directory."""

    def __init__(self, output_dir: str | Path = ".") -> None:
        self.output_dir = Path(output_dir)

    def deliver(self, content: bytes, filename: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / filename
        path.write_bytes(content)
        logger.debug(f"Wrote {len(content)} bytes to {path}")
        return path
