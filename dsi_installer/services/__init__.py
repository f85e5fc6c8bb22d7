"""
DSI Installer Services Layer

The filesystem, process and relaunch operations the orchestrator drives.
"""

from .process_gate import ProcessGate, poll_until
from .file_sync import FileSyncService, mirror_copy
from .manifest_service import ManifestService, construct_manifest
from .relaunch_service import RelaunchService

__all__ = [
    "ProcessGate",
    "poll_until",
    "FileSyncService",
    "mirror_copy",
    "ManifestService",
    "construct_manifest",
    "RelaunchService",
]
