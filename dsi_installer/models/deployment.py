"""
Deployment Configuration Model

The single, immutable value every component reads its flags from.
"""

from dataclasses import dataclass, field
from typing import Optional

from .credentials import AdminTarget, RemoteCredential, SecretValue


@dataclass(frozen=True)
class DeploymentConfig:
    """
    Parsed command line.

    Built once by core.arguments.parse_arguments and passed explicitly to the
    orchestrator. When deploy_as_admin is raised it wins over every other
    mode selector.
    """

    verbose: bool = False
    launched_from_addin: bool = False
    debug: bool = False
    deploy_install: bool = False
    deploy_manifest: bool = False
    deploy_as_admin: AdminTarget = field(default_factory=AdminTarget)
    version: Optional[str] = None
    app_data_directory: Optional[str] = None
    username: Optional[str] = None
    password: Optional[SecretValue] = None
    domain: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        """True when username, password and domain were all supplied, even if empty."""
        return not self.missing_credentials()

    def credential(self) -> Optional[RemoteCredential]:
        """Credential triple, or None if any part is missing."""
        if not self.has_credentials:
            return None
        return RemoteCredential(
            username=self.username, password=self.password, domain=self.domain
        )

    def missing_credentials(self) -> list[str]:
        """Names of the credential flags that were not supplied."""
        missing = []
        if self.username is None:
            missing.append("username")
        if self.password is None or self.password.is_cleared:
            missing.append("password")
        if self.domain is None:
            missing.append("domain")
        return missing
