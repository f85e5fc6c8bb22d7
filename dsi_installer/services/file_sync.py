"""File sync service: mirror the toolkit payload into per-version install directories."""

import shutil
from pathlib import Path
from typing import Iterable, List

from dsi_installer.exceptions import MissingSourceError
from dsi_installer.logger import InstallerLogger
from dsi_installer.models.results import ResultStatus, VersionResult


def mirror_copy(source: Path, destination: Path) -> List[Path]:
    """
    Recursively copy every file and subdirectory of source into destination.

    Existing destination files with the same relative path are overwritten;
    files that exist only in destination are left alone.

    Returns:
        Destination paths of the copied files

    Raises:
        MissingSourceError: If source is not an existing directory
    """
    source = Path(source)
    destination = Path(destination)

    if not source.is_dir():
        raise MissingSourceError(str(source))

    copied: List[Path] = []

    def _copy(src, dst):
        copied.append(Path(dst))
        return shutil.copy2(src, dst)

    shutil.copytree(source, destination, copy_function=_copy, dirs_exist_ok=True)
    return copied


class FileSyncService:
    """Installs the toolkit payload for each supported Revit version."""

    def __init__(
        self,
        logger: InstallerLogger,
        install_directory_name: str,
        source_for_version,
    ):
        """
        Initialize file sync service

        Args:
            logger: Installer logger
            install_directory_name: Folder created under the app data root
            source_for_version: Callable mapping a version tag to its source directory
        """
        self.logger = logger
        self.install_directory_name = install_directory_name
        self.source_for_version = source_for_version

    def install_root(self, app_data_root: str) -> Path:
        return Path(app_data_root) / self.install_directory_name

    def install(
        self, app_data_root: str, versions: Iterable[str]
    ) -> List[VersionResult]:
        """
        Copy the payload for every version into {app_data_root}/{install dir}/{version}.

        Filesystem errors are not caught here.
        """
        root = self.install_root(app_data_root)
        if not root.exists():
            self.logger.verbose(f"{root} doesn't exist; creating the directory now")
        root.mkdir(parents=True, exist_ok=True)

        results = []
        for version in versions:
            results.append(self.install_version(root, version))
        return results

    def install_version(self, root: Path, version: str) -> VersionResult:
        self.logger.verbose(f"beginning installation process for Revit {version}")

        target = root / version
        if not target.exists():
            self.logger.verbose(f"{target} doesn't exist; creating the directory now")
            target.mkdir(parents=True, exist_ok=True)

        source = self.source_for_version(version)
        self.logger.verbose(f"now copying {source} to {target}")
        copied = mirror_copy(Path(source), target)

        return VersionResult(
            version=version,
            status=ResultStatus.SUCCESS,
            path=target,
            message=f"{len(copied)} files copied",
        )

