"""Settings for the DSI installer: packaged defaults overridden by installer.yml"""

import os
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from dsi_installer import constants
from dsi_installer.exceptions import ConfigurationError


@dataclass(frozen=True)
class InstallerSettings:
    """Resource constants the installer runs with"""

    host_process_name: str = constants.HOST_PROCESS_NAME
    supported_versions: Tuple[str, ...] = constants.SUPPORTED_REVIT_VERSIONS
    dll_name: str = constants.DLL_NAME
    client_guid: str = constants.CLIENT_GUID
    install_directory_name: str = constants.INSTALL_DIRECTORY_NAME
    legacy_manifest_name: str = constants.LEGACY_MANIFEST_NAME
    source_path_prefix: str = constants.SOURCE_PATH_PREFIX
    source_path_postfix: str = constants.SOURCE_PATH_POSTFIX
    debug_path_prefix: str = constants.DEBUG_PATH_PREFIX
    debug_path_postfix: str = constants.DEBUG_PATH_POSTFIX
    executable_name: str = constants.EXECUTABLE_NAME
    remote_executable_path: str = constants.REMOTE_EXECUTABLE_PATH
    debug_executable_path: str = constants.DEBUG_EXECUTABLE_PATH
    revit_addins_path: str = constants.REVIT_ADDINS_PATH
    remote_addins_template: str = constants.REMOTE_ADDINS_TEMPLATE
    remote_app_data_template: str = constants.REMOTE_APP_DATA_TEMPLATE
    remote_dll_root_template: str = constants.REMOTE_DLL_ROOT_TEMPLATE
    gate_poll_interval: float = constants.GATE_POLL_INTERVAL_SECONDS
    log_directory: Optional[str] = None
    local_app_data: Optional[str] = None

    def source_directory(self, version: str, debug: bool = False) -> str:
        """Payload source for one Revit version (release share or debug build output)."""
        if debug:
            return f"{self.debug_path_prefix}{version}{self.debug_path_postfix}"
        return f"{self.source_path_prefix}{version}{self.source_path_postfix}"

    def executable_directory(self, debug: bool = False) -> str:
        """Working directory of the relaunched installer."""
        return self.debug_executable_path if debug else self.remote_executable_path

    def local_app_data_path(self) -> str:
        """%LOCALAPPDATA% of the current user."""
        if self.local_app_data:
            return self.local_app_data
        env_value = os.environ.get("LOCALAPPDATA")
        if env_value:
            return env_value
        return str(Path.home() / "AppData" / "Local")

    def remote_app_data_path(self, machine: str, user: str) -> str:
        """Admin share path to a user's local app data on another machine."""
        return self.remote_app_data_template.format(machine=machine, user=user)

    def remote_addins_path(self, machine: str) -> str:
        return self.remote_addins_template.format(machine=machine)

    def remote_dll_root(self, user: str) -> str:
        """App data root as seen from the remote machine itself."""
        return self.remote_dll_root_template.format(user=user)


class ConfigLoader:
    """Loads installer.yml and applies it on top of the packaged defaults"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config loader

        Args:
            config_path: Explicit settings file; when None the loader checks
                $DSI_INSTALLER_CONFIG, then installer.yml beside the executable
        """
        self.config_path = config_path

    def resolve_path(self) -> Optional[Path]:
        """Locate the settings file, or None if there is none."""
        if self.config_path is not None:
            return Path(self.config_path)

        env_path = os.environ.get(constants.CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)

        candidate = Path(sys.argv[0]).resolve().parent / constants.CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        return None

    def load(self) -> InstallerSettings:
        """
        Load settings

        Returns:
            InstallerSettings with overrides applied

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        path = self.resolve_path()
        if path is None:
            return InstallerSettings()

        if not path.is_file():
            raise ConfigurationError(
                f"Settings file not found: {path}",
                context=f"Unset {constants.CONFIG_ENV_VAR} or point it at an existing file",
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}", context=str(e))
        except OSError as e:
            raise ConfigurationError(f"Could not read {path}", context=str(e))

        return self.apply(raw or {}, source=str(path))

    @staticmethod
    def apply(raw: Any, source: str = "<settings>") -> InstallerSettings:
        """Validate a parsed settings mapping and build InstallerSettings from it."""
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Settings in {source} must be a mapping",
                context=f"Got {type(raw).__name__}",
            )

        known = {f.name for f in fields(InstallerSettings)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown settings in {source}: {', '.join(unknown)}",
                context=f"Valid keys: {', '.join(sorted(known))}",
            )

        overrides: Dict[str, Any] = dict(raw)
        if "supported_versions" in overrides:
            versions = overrides["supported_versions"]
            if not isinstance(versions, (list, tuple)) or not versions:
                raise ConfigurationError(
                    "supported_versions must be a non-empty list",
                    context=source,
                )
            overrides["supported_versions"] = tuple(str(v) for v in versions)

        return replace(InstallerSettings(), **overrides)


def load_settings(config_path: Optional[Path] = None) -> InstallerSettings:
    """Shortcut for ConfigLoader(config_path).load()"""
    return ConfigLoader(config_path).load()
