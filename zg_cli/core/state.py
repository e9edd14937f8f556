"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console


@dataclass
class CLIState:
    """CLI runtime options and loaded configuration."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console
    catalog_path: Optional[Path] = None

    def debug(self, message: str) -> None:
        """Log a diagnostic line when --verbose is set."""
        if self.verbose and not self.quiet:
            self.console.log(message)
