"""
DSI Installer Constants

Centralized defaults for paths, names and identifiers.
Every value here can be overridden from installer.yml (see core.config_loader).
"""

# Host application
HOST_PROCESS_NAME = "Revit"
SUPPORTED_REVIT_VERSIONS = ("2018", "2019", "2020", "2022")

# Payload
DLL_NAME = "DSIRevitToolkit"
CLIENT_GUID = "5a1c8f3e-2b7d-4c19-9e46-0d8b7a3f61c2"
INSTALL_DIRECTORY_NAME = "DSI Toolkit"
LEGACY_MANIFEST_NAME = "DSIToolKit"

# Source share (release and debug builds)
SOURCE_PATH_PREFIX = "\\\\dsi-fs01\\Software\\DSI Toolkit\\Revit "
SOURCE_PATH_POSTFIX = ""
DEBUG_PATH_PREFIX = "C:\\Source\\DSI Toolkit\\bin\\Debug\\Revit "
DEBUG_PATH_POSTFIX = "\\net48"

# Relaunch target
EXECUTABLE_NAME = "DSIToolkitAddinInstaller.exe"
REMOTE_EXECUTABLE_PATH = "\\\\dsi-fs01\\Software\\DSI Toolkit\\Installer"
DEBUG_EXECUTABLE_PATH = "C:\\Source\\DSI Toolkit Installer\\bin\\Debug"

# Revit addin registration
REVIT_ADDINS_PATH = "C:\\ProgramData\\Autodesk\\Revit\\Addins"
REMOTE_ADDINS_TEMPLATE = "\\\\{machine}\\c$\\ProgramData\\Autodesk\\Revit\\Addins"
REMOTE_APP_DATA_TEMPLATE = "\\\\{machine}\\c$\\Users\\{user}\\AppData\\Local"
REMOTE_DLL_ROOT_TEMPLATE = "C:\\Users\\{user}\\AppData\\Local"

# Process gate
GATE_POLL_INTERVAL_SECONDS = 5

# Configuration
CONFIG_ENV_VAR = "DSI_INSTALLER_CONFIG"
CONFIG_FILE_NAME = "installer.yml"

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Messages
MSG_INSTALL_COMPLETE = "Installation complete; please press any key to close this window."
MSG_HOST_RUNNING = (
    "There is an instance of {process} still running; "
    "waiting until the instance is closed to continue... ({attempt})"
)
ERROR_MISSING_CREDENTIALS = (
    "error reading either the username, password, or domain provided through "
    "the command line; check the arguments and rerun the executable"
)
ERROR_MANIFEST_WRITE = (
    "unable to write manifest for Revit {version}; "
    "elevating to admin privileges would probably fix this issue"
)
