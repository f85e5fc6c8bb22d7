"""
DSI Installer Domain Models

Dataclass-based models for configuration, credentials and results.
"""

from .credentials import (
    SecretValue,
    AdminTarget,
    RemoteCredential,
)
from .deployment import DeploymentConfig
from .results import (
    ResultStatus,
    VersionResult,
    RelaunchResult,
    DeploymentReport,
)

__all__ = [
    # Credentials
    "SecretValue",
    "AdminTarget",
    "RemoteCredential",
    # Deployment
    "DeploymentConfig",
    # Results
    "ResultStatus",
    "VersionResult",
    "RelaunchResult",
    "DeploymentReport",
]
