"""
DSI Installer Core

Configuration, argument scanning, mode selection and orchestration.
"""

from .arguments import parse_arguments
from .config_loader import ConfigLoader, InstallerSettings, load_settings
from .modes import (
    AdminRemote,
    DeploymentMode,
    ManifestOnly,
    Relay,
    Standalone,
    select_mode,
)
from .orchestrator import DeploymentOrchestrator

__all__ = [
    "parse_arguments",
    "ConfigLoader",
    "InstallerSettings",
    "load_settings",
    "AdminRemote",
    "DeploymentMode",
    "ManifestOnly",
    "Relay",
    "Standalone",
    "select_mode",
    "DeploymentOrchestrator",
]
