"""
Logging system for the DSI installer
Console lines in the installer's [verbose]/[error] format, optionally mirrored to a log file
"""

from pathlib import Path
from datetime import datetime
from typing import Optional, TextIO
from rich.console import Console
from rich.text import Text

from dsi_installer.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT

console = Console(highlight=False, soft_wrap=True)
_default_console = console


class InstallerLogger:
    """
    Manages console and file logging for one installer run
    - Plain progress lines always reach the console
    - [verbose] lines only when verbose is on
    - [error] lines always, and mark the run as failed in the log file
    """

    def __init__(
        self,
        operation: str = "install",
        verbose: bool = False,
        log_directory: Optional[Path] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            operation: Operation name used in the log file name (e.g., 'standalone', 'relay')
            verbose: If True, print [verbose] lines
            log_directory: Root of the log tree; no file is written when None
            console: Console to print to (defaults to the module console)
        """
        self.operation = operation
        self.verbose_enabled = verbose
        self.console = console if console is not None else _default_console
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.has_errors = False

        if log_directory is not None:
            self._open_log_file(Path(log_directory))

    def _open_log_file(self, log_directory: Path) -> None:
        # Structure: {log_directory}/{date}/{time}_{operation}.log
        now = datetime.now()
        day_dir = log_directory / now.strftime(LOG_DATE_FORMAT)
        day_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = day_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{self.operation}.log"
        self.log_file = open(self.log_path, "w", buffering=1, encoding="utf-8")
        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
DSI Toolkit Installer Log
{"=" * 80}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def set_verbose(self, verbose: bool) -> None:
        self.verbose_enabled = verbose

    def _to_file(self, level: str, message: str) -> None:
        if self.log_file:
            timestamp = datetime.now().strftime("%H:%M:%S")
            self.log_file.write(f"[{timestamp}] [{level}] {message}\n")
            self.log_file.flush()

    def log(self, message: str) -> None:
        """Print a plain progress line"""
        self._to_file("INFO", message)
        self.console.print(Text(message))

    def verbose(self, message: str) -> None:
        """Print a [verbose] line when verbose mode is on"""
        self._to_file("DEBUG", message)
        if self.verbose_enabled:
            self.console.print(Text(f"[verbose] {message}", style="dim"))

    def error(self, message: str, exc: Optional[BaseException] = None) -> None:
        """
        Print an [error] line

        Args:
            message: Error detail
            exc: Exception that caused it; its type name prefixes the message
        """
        self.has_errors = True
        if exc is not None:
            message = f"{type(exc).__name__} - {message}"

        self._to_file("ERROR", message)
        self.console.print(Text(f"[error] {message}", style="red"))

    def step(self, step_name: str) -> None:
        """Announce a new stage (verbose only)"""
        self.verbose(f"=== {step_name} ===")

    def output(self, text: str) -> None:
        """Echo captured child-process output untouched"""
        if not text:
            return
        if self.log_file:
            for line in text.splitlines():
                self.log_file.write(f"  [child] {line}\n")
            self.log_file.flush()
        self.console.out(text, end="", highlight=False)

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is not None and exc_type is not SystemExit:
            self.has_errors = True
            self._to_file("ERROR", f"{exc_type.__name__}: {exc_val}")
        self.close()
        return False  # Don't suppress exceptions
