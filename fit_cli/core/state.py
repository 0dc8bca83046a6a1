"""Per-invocation state shared by fit commands."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ContextManager, Dict

from rich.console import Console


@dataclass
class CLIState:
    """Output mode, verbosity and merged configuration for one `fit` run."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console

    @property
    def interactive(self) -> bool:
        """True when output is rich text for a human rather than JSON or plain lines."""
        return not (self.json_output or self.plain_output)

    def section(self, name: str) -> Dict[str, Any]:
        value = self.config.get(name)
        return value if isinstance(value, dict) else {}

    def spinner(self, message: str) -> ContextManager[Any]:
        """Rich status spinner in interactive mode, a no-op otherwise."""
        return self.console.status(message) if self.interactive else nullcontext()
