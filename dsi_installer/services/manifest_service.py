"""
Manifest Service

Builds and writes the .addin manifests that register the toolkit with Revit,
and removes the manifests older toolkit releases left behind.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List

from dsi_installer.constants import ERROR_MANIFEST_WRITE
from dsi_installer.logger import InstallerLogger
from dsi_installer.models.results import ResultStatus, VersionResult


MANIFEST_TEMPLATE = (
    '<?xml version="1.0" encoding="utf-8" ?>\n'
    "<RevitAddIns>\n"
    '  <AddIn Type="Application">\n'
    "    <Name>DSI Toolkit</Name>\n"
    "    <Description>DSI Toolkit Ribbon for Revit {version}</Description>\n"
    "    <Assembly>{dll_path}</Assembly>\n"
    "    <FullClassName>DSI.Application</FullClassName>\n"
    "    <ClientId>{client_guid}</ClientId>\n"
    "    <VendorId>us.dsi</VendorId>\n"
    "    <VendorDescription>Dynamic Systems, Inc.</VendorDescription>\n"
    "  </AddIn>\n"
    "</RevitAddIns>\n"
)


def construct_manifest(version: str, dll_path: str, client_guid: str) -> str:
    """Manifest XML for one Revit version."""
    return MANIFEST_TEMPLATE.format(
        version=version, dll_path=dll_path, client_guid=client_guid
    )


@dataclass(frozen=True)
class ManifestDescriptor:
    """Inputs for one version's manifest."""

    version: str
    dll_path: str
    client_guid: str
    target_directory: Path


class ManifestService:
    """Writes manifests idempotently, one Revit version at a time."""

    def __init__(
        self,
        logger: InstallerLogger,
        dll_name: str,
        legacy_name: str,
        client_guid: str,
    ):
        """
        Initialize manifest service

        Args:
            logger: Installer logger
            dll_name: Toolkit assembly name; manifests are named {dll_name}{version}.addin
            legacy_name: Name prefix used by older releases' manifests
            client_guid: ClientId written into every manifest
        """
        self.logger = logger
        self.dll_name = dll_name
        self.legacy_name = legacy_name
        self.client_guid = client_guid

    def manifest_path(self, target_directory: Path, version: str) -> Path:
        return Path(target_directory) / f"{self.dll_name}{version}.addin"

    def stale_manifest_paths(self, target_directory: Path, version: str) -> List[Path]:
        target_directory = Path(target_directory)
        return [
            target_directory / f"{self.legacy_name} - {version}.addin",
            target_directory / f"{self.legacy_name} - Debug {version}.addin",
        ]

    def cleanup_stale(self, target_directory: Path, version: str) -> List[Path]:
        """
        Delete the two legacy manifests for version, if present.

        Returns:
            Paths that were deleted
        """
        deleted = []
        for path in self.stale_manifest_paths(target_directory, version):
            self.logger.verbose(f"checking to see if {path} exists...")
            if path.exists():
                self.logger.verbose(f"{path} exists; now deleting file")
                path.unlink()
                deleted.append(path)
            else:
                self.logger.verbose(f"{path} does not exist, continuing")
        return deleted

    def write_manifest(
        self, target_directory: Path, version: str, dll_path: str, client_guid: str
    ) -> Path:
        """
        Clean up legacy manifests and (re)write {dll_name}{version}.addin.

        The file is created empty first if missing, then its full contents are
        replaced. OSError propagates to the caller.
        """
        self.cleanup_stale(target_directory, version)

        addin_path = self.manifest_path(target_directory, version)

        self.logger.verbose("checking to see if an addin file already exists...")
        if not addin_path.exists():
            self.logger.verbose(f"{addin_path} does not exist; creating addin file now")
            addin_path.touch()
        else:
            self.logger.verbose(f"{addin_path} exists; continuing")

        self.logger.verbose("writing manifest to addin file")
        with open(addin_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(construct_manifest(version, dll_path, client_guid))
        return addin_path

    def write_all(
        self,
        versions: Iterable[str],
        addins_directory: Callable[[str], Path],
        dll_path: Callable[[str], str],
    ) -> List[VersionResult]:
        """
        Write manifests for every version, continuing past per-version failures.

        Args:
            versions: Revit versions in install order
            addins_directory: Maps a version to its Revit addin directory
            dll_path: Maps a version to the assembly path written into the manifest

        Returns:
            One VersionResult per version
        """
        results = []
        for version in versions:
            descriptor = ManifestDescriptor(
                version=version,
                dll_path=dll_path(version),
                client_guid=self.client_guid,
                target_directory=Path(addins_directory(version)),
            )
            results.append(self._write_descriptor(descriptor))
        return results

    def _write_descriptor(self, descriptor: ManifestDescriptor) -> VersionResult:
        version = descriptor.version

        try:
            path = self.write_manifest(
                descriptor.target_directory,
                version,
                descriptor.dll_path,
                descriptor.client_guid,
            )
        except OSError as e:
            self.logger.error(ERROR_MANIFEST_WRITE.format(version=version), exc=e)
            return VersionResult(
                version=version,
                status=ResultStatus.FAILURE,
                path=descriptor.target_directory,
                message=str(e),
            )

        return VersionResult(version=version, status=ResultStatus.SUCCESS, path=path)
