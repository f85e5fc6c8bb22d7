"""
Installer errors

Failures that stop a stage of the install. Each carries a one-line message
for the [error] output and an optional detail (a path, the missing flags)
that is only shown in verbose output or the log file.
"""

from typing import Optional


class InstallerError(Exception):
    """Root of every error the installer raises itself."""

    def __init__(self, message: str, context: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{self.message} ({self.context})"


class ConfigurationError(InstallerError):
    """Raised when the settings file is invalid or unreadable."""

    pass


class MissingSourceError(InstallerError, FileNotFoundError):
    """
    Raised when a payload source directory does not exist.

    Fatal: the orchestrator never catches it.
    """

    def __init__(self, source: str):
        self.source = source
        super().__init__(
            f"Source directory does not exist or could not be found: {source}"
        )


class CredentialError(InstallerError):
    """Raised when relay mode is missing part of its credential triple."""

    pass


class RelaunchError(InstallerError):
    """Raised when the credentialed child process cannot be started or read."""

    pass
