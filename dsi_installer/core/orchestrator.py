"""
Deployment Orchestrator

Selects the deployment mode for a run and drives the process gate, file sync,
manifest writer and relauncher in the order that mode needs.
"""

import ntpath
from pathlib import Path
from typing import List, Optional, Tuple

from dsi_installer.constants import ERROR_MISSING_CREDENTIALS
from dsi_installer.core.config_loader import InstallerSettings
from dsi_installer.core.modes import (
    AdminRemote,
    DeploymentMode,
    ManifestOnly,
    Relay,
    Standalone,
    select_mode,
)
from dsi_installer.exceptions import CredentialError
from dsi_installer.logger import InstallerLogger
from dsi_installer.models.deployment import DeploymentConfig
from dsi_installer.models.results import DeploymentReport
from dsi_installer.services.file_sync import FileSyncService
from dsi_installer.services.manifest_service import ManifestService
from dsi_installer.services.process_gate import ProcessGate
from dsi_installer.services.relaunch_service import RelaunchService


class DeploymentOrchestrator:
    """
    Runs one installer invocation.

    Every mode starts by waiting for Revit to exit. Sync errors propagate;
    manifest, credential and relaunch errors are logged and recorded on the
    returned DeploymentReport.
    """

    def __init__(
        self,
        settings: InstallerSettings,
        logger: InstallerLogger,
        gate: Optional[ProcessGate] = None,
        sync: Optional[FileSyncService] = None,
        manifests: Optional[ManifestService] = None,
        relauncher: Optional[RelaunchService] = None,
    ):
        self.settings = settings
        self.logger = logger
        self.gate = gate or ProcessGate(logger, interval=settings.gate_poll_interval)
        self.relauncher = relauncher or RelaunchService(logger)
        self.manifests = manifests or ManifestService(
            logger,
            dll_name=settings.dll_name,
            legacy_name=settings.legacy_manifest_name,
            client_guid=settings.client_guid,
        )
        self._sync = sync

    def sync_service(self, config: DeploymentConfig) -> FileSyncService:
        if self._sync is not None:
            return self._sync
        return FileSyncService(
            self.logger,
            install_directory_name=self.settings.install_directory_name,
            source_for_version=lambda version: self.settings.source_directory(
                version, debug=config.debug
            ),
        )

    def versions(self, config: DeploymentConfig) -> Tuple[str, ...]:
        """Supported versions, narrowed to --version when one was given."""
        supported = tuple(self.settings.supported_versions)
        if config.version is None:
            return supported
        return tuple(v for v in supported if v == config.version)

    def run(self, config: DeploymentConfig) -> DeploymentReport:
        """Select the mode for config and execute it."""
        mode = select_mode(config)
        report = DeploymentReport(mode=mode)
        self.logger.verbose(f"deployment mode: {mode.name}")

        versions = self.versions(config)
        if not versions:
            message = (
                f"Revit {config.version} is not a supported version; supported "
                f"versions are {', '.join(self.settings.supported_versions)}"
            )
            self.logger.error(message)
            report.add_error(message)
            return report

        self.logger.step("Waiting for Revit to exit")
        self.gate.wait_until_clear(self.settings.host_process_name)

        if isinstance(mode, Standalone):
            self._run_standalone(config, mode, versions, report)
        elif isinstance(mode, AdminRemote):
            self._run_admin_remote(config, mode, versions, report)
        elif isinstance(mode, Relay):
            self._run_relay(config, mode, versions, report)
        elif isinstance(mode, ManifestOnly):
            self._run_manifest_only(mode, versions, report)

        report.completed = True
        return report

    # Modes

    def _run_standalone(
        self,
        config: DeploymentConfig,
        mode: Standalone,
        versions: Tuple[str, ...],
        report: DeploymentReport,
    ) -> None:
        app_data = self.settings.local_app_data_path()

        self.logger.step("Installing toolkit")
        report.sync_results = self.sync_service(config).install(app_data, versions)

        if mode.write_manifests:
            self.logger.step("Writing manifests")
            report.manifest_results = self._write_local_manifests(app_data, versions)
        else:
            self.logger.verbose("launched from the addin; leaving the manifests alone")

    def _run_admin_remote(
        self,
        config: DeploymentConfig,
        mode: AdminRemote,
        versions: Tuple[str, ...],
        report: DeploymentReport,
    ) -> None:
        remote_app_data = self.settings.remote_app_data_path(mode.machine, mode.user)

        self.logger.step(f"Installing toolkit on {mode.machine} for {mode.user}")
        report.sync_results = self.sync_service(config).install(
            remote_app_data, versions
        )

        self.logger.step(f"Writing manifests on {mode.machine}")
        addins_root = self.settings.remote_addins_path(mode.machine)
        dll_root = self.settings.remote_dll_root(mode.user)
        report.manifest_results = self.manifests.write_all(
            versions,
            addins_directory=lambda version: Path(ntpath.join(addins_root, version)),
            dll_path=lambda version: self._windows_dll_path(dll_root, version),
        )
        self._report_manifest_failures(report.manifest_results)

    def _run_relay(
        self,
        config: DeploymentConfig,
        mode: Relay,
        versions: Tuple[str, ...],
        report: DeploymentReport,
    ) -> None:
        app_data = self.settings.local_app_data_path()

        self.logger.step("Installing toolkit")
        report.sync_results = self.sync_service(config).install(app_data, versions)

        if mode.credential is None:
            error = CredentialError(
                ERROR_MISSING_CREDENTIALS, context=f"missing: {', '.join(mode.missing)}"
            )
            self.logger.error(error.message)
            self.logger.verbose(error.context)
            report.add_error(error.message)
            return

        self.logger.step("Relaunching installer for the manifests")
        arguments = self.relaunch_arguments(app_data, config)
        executable_dir = self.settings.executable_directory(debug=config.debug)
        executable = ntpath.join(executable_dir, self.settings.executable_name)

        result = self.relauncher.relaunch(
            executable, arguments, mode.credential, working_directory=executable_dir
        )
        report.relaunch = result

        if result.error:
            self.logger.error(result.error)
            report.add_error(result.error)
            return
        self.logger.output(result.output)

    def _run_manifest_only(
        self, mode: ManifestOnly, versions: Tuple[str, ...], report: DeploymentReport
    ) -> None:
        if not mode.app_data_directory:
            message = (
                "--deploy-manifest needs --app-data-directory <path>; "
                "no manifests were written"
            )
            self.logger.error(message)
            report.add_error(message)
            return

        self.logger.step("Writing manifests")
        report.manifest_results = self._write_local_manifests(
            mode.app_data_directory, versions
        )

    # Helpers

    def relaunch_arguments(self, app_data: str, config: DeploymentConfig) -> List[str]:
        """Arguments for the manifest-only second stage."""
        arguments = ["--deploy-manifest", "--app-data-directory", app_data, "--verbose"]
        if config.version:
            arguments.extend(["--version", config.version])
        return arguments

    def _write_local_manifests(self, app_data: str, versions: Tuple[str, ...]):
        addins_root = Path(self.settings.revit_addins_path)
        install_root = Path(app_data) / self.settings.install_directory_name
        dll_file = f"{self.settings.dll_name}.dll"

        results = self.manifests.write_all(
            versions,
            addins_directory=lambda version: addins_root / version,
            dll_path=lambda version: str(install_root / version / dll_file),
        )
        self._report_manifest_failures(results)
        return results

    def _windows_dll_path(self, dll_root: str, version: str) -> str:
        return ntpath.join(
            dll_root,
            self.settings.install_directory_name,
            version,
            f"{self.settings.dll_name}.dll",
        )

    def _report_manifest_failures(self, results) -> None:
        failed = [r.version for r in results if r.is_failure]
        if failed:
            self.logger.verbose(f"manifests not written for: {', '.join(failed)}")
