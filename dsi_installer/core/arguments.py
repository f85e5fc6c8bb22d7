"""
Argument scanner

Turns the raw command-line tokens into a DeploymentConfig. Flags may appear
in any order. A flag that takes values only consumes them when none of them
starts with '-'; otherwise that occurrence is ignored.
"""

from typing import Dict, List, Optional, Sequence

from dsi_installer.logger import InstallerLogger
from dsi_installer.models.credentials import AdminTarget, SecretValue
from dsi_installer.models.deployment import DeploymentConfig


SWITCHES: Dict[str, str] = {
    "--verbose": "verbose",
    "--launched-from-addin": "launched_from_addin",
    "--deploy-install": "deploy_install",
    "--deploy-manifest": "deploy_manifest",
    "--debug": "debug",
}

SWITCH_NOTICES: Dict[str, str] = {
    "verbose": "verbose flag provided; entering verbose mode",
    "launched_from_addin": "addin flag provided",
    "deploy_install": "deploy install flag provided",
    "deploy_manifest": "deploy manifest flag provided",
    "debug": "debug flag provided",
}

VALUE_OPTIONS: Dict[str, str] = {
    "--version": "version",
    "--app-data-directory": "app_data_directory",
    "--username": "username",
    "-u": "username",
    "--password": "password",
    "-p": "password",
    "--domain": "domain",
    "-d": "domain",
}

VALUE_NOTICES: Dict[str, str] = {
    "version": (
        "version flag and argument provided; only the {value} version of the "
        "toolkit will be installed (if it exists)"
    ),
    "app_data_directory": (
        "app data directory flag and argument provided; the manifest file will "
        "be written using this argument"
    ),
    "username": "username flag and argument provided",
    "password": "password flag and argument provided",
    "domain": "domain flag and argument provided",
}


def _take_values(tokens: Sequence[str], index: int, count: int) -> Optional[List[str]]:
    """The count tokens after index, or None if any is missing or looks like a flag."""
    values = list(tokens[index + 1 : index + 1 + count])
    if len(values) < count or any(v.startswith("-") for v in values):
        return None
    return values


def parse_arguments(
    tokens: Sequence[str], logger: Optional[InstallerLogger] = None
) -> DeploymentConfig:
    """
    Scan tokens and build the run's configuration.

    The password is wrapped in a sealed SecretValue as soon as it is read.
    Unknown tokens are ignored.
    """
    switches = {attr: False for attr in SWITCHES.values()}
    values: Dict[str, object] = {}
    admin = AdminTarget()

    def notice(message: str) -> None:
        if logger is not None and switches["verbose"]:
            logger.verbose(message)

    if logger is not None and "--verbose" in tokens:
        logger.set_verbose(True)

    i = 0
    while i < len(tokens):
        token = tokens[i]
        consumed = 0

        if token in SWITCHES:
            attr = SWITCHES[token]
            switches[attr] = True
            notice(SWITCH_NOTICES[attr])

        elif token == "--deploy-as-admin":
            pair = _take_values(tokens, i, 2)
            if pair is not None:
                admin = AdminTarget(raised=True, machine=pair[0], user=pair[1])
                notice("deploy as admin flag provided")
                consumed = 2

        elif token in VALUE_OPTIONS:
            attr = VALUE_OPTIONS[token]
            taken = _take_values(tokens, i, 1)
            if taken is not None:
                if attr == "password":
                    previous = values.get("password")
                    if isinstance(previous, SecretValue):
                        previous.clear()
                    values[attr] = SecretValue.from_plain(taken[0])
                else:
                    values[attr] = taken[0]
                notice(VALUE_NOTICES[attr].format(value=taken[0]))
                consumed = 1

        i += 1 + consumed

    return DeploymentConfig(
        verbose=switches["verbose"],
        launched_from_addin=switches["launched_from_addin"],
        debug=switches["debug"],
        deploy_install=switches["deploy_install"],
        deploy_manifest=switches["deploy_manifest"],
        deploy_as_admin=admin,
        **values,
    )
