"""
Deployment modes

The four mutually exclusive ways the installer can run, and the pure
function that picks one from a DeploymentConfig.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from dsi_installer.models.credentials import RemoteCredential
from dsi_installer.models.deployment import DeploymentConfig


@dataclass(frozen=True)
class Standalone:
    """Launched by hand or by Revit: install locally, then write manifests."""

    write_manifests: bool = True
    name: ClassVar[str] = "standalone"


@dataclass(frozen=True)
class AdminRemote:
    """Push files and manifests straight to another machine over its admin share."""

    machine: str
    user: str
    name: ClassVar[str] = "admin-remote"


@dataclass(frozen=True)
class Relay:
    """Stage 1 of the remote push: install, then relaunch for the manifests."""

    credential: Optional[RemoteCredential] = None
    missing: tuple = ()
    name: ClassVar[str] = "relay"


@dataclass(frozen=True)
class ManifestOnly:
    """Stage 2 of the remote push: write manifests only."""

    app_data_directory: Optional[str] = None
    name: ClassVar[str] = "manifest-only"


DeploymentMode = Union[Standalone, AdminRemote, Relay, ManifestOnly]


def select_mode(config: DeploymentConfig) -> DeploymentMode:
    """
    Pick the deployment mode.

    Priority: admin-remote, then relay, then manifest-only. With none of
    those flags the installer runs standalone.
    """
    if config.deploy_as_admin.raised:
        return AdminRemote(
            machine=config.deploy_as_admin.machine, user=config.deploy_as_admin.user
        )
    if config.deploy_install:
        return Relay(
            credential=config.credential(),
            missing=tuple(config.missing_credentials()),
        )
    if config.deploy_manifest:
        return ManifestOnly(app_data_directory=config.app_data_directory)
    return Standalone(write_manifests=not config.launched_from_addin)
