"""Test helpers shared across modules."""

import io
from pathlib import Path

from rich.console import Console

from dsi_installer.logger import InstallerLogger


class CapturingLogger(InstallerLogger):
    """InstallerLogger printing into a string buffer."""

    def __init__(self, verbose: bool = False):
        self.buffer = io.StringIO()
        super().__init__(
            operation="test",
            verbose=verbose,
            console=Console(
                file=self.buffer, width=500, soft_wrap=True, color_system=None
            ),
        )

    @property
    def text(self) -> str:
        return self.buffer.getvalue()

    @property
    def lines(self) -> list:
        return self.text.splitlines()


def make_payload(settings, version, files=None, debug=False):
    """Create a payload source tree for version and return its path."""
    root = Path(settings.source_directory(version, debug=debug))
    files = files or {"DSIRevitToolkit.dll": b"dll-" + version.encode()}
    for rel, data in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    return root


def make_addin_dirs(settings, versions=None):
    """Create the Revit per-version addin directories."""
    for version in versions or settings.supported_versions:
        (Path(settings.revit_addins_path) / version).mkdir(parents=True, exist_ok=True)
