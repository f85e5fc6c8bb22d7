"""Relaunch service: start a second installer instance under another user's logon."""

import base64
import subprocess
import sys
from typing import Callable, List, Optional, Sequence

from dsi_installer.exceptions import RelaunchError
from dsi_installer.logger import InstallerLogger
from dsi_installer.models.credentials import RemoteCredential
from dsi_installer.models.results import RelaunchResult


# The password arrives on stdin so it never appears on a command line.
# Start-Process cannot pipe a credentialed child's stdout, so it is
# redirected to a temp file and echoed back once the child exits.
_START_PROCESS_SCRIPT = """\
$ErrorActionPreference = 'Stop'
$secure = ConvertTo-SecureString -String ([Console]::In.ReadLine()) -AsPlainText -Force
$credential = New-Object System.Management.Automation.PSCredential({user}, $secure)
$out = [System.IO.Path]::GetTempFileName()
try {{
    $proc = Start-Process -FilePath {file} -ArgumentList {arguments} -WorkingDirectory {cwd} -Credential $credential -NoNewWindow -Wait -PassThru -RedirectStandardOutput $out
    [Console]::Out.Write([System.IO.File]::ReadAllText($out))
    exit $proc.ExitCode
}} finally {{
    Remove-Item -LiteralPath $out -ErrorAction SilentlyContinue
}}
"""


def ps_quote(value: str) -> str:
    """Single-quoted PowerShell literal."""
    return "'" + value.replace("'", "''") + "'"


class RelaunchService:
    """Runs the installer again as a given domain user and collects its stdout."""

    def __init__(
        self,
        logger: InstallerLogger,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
        platform: Optional[str] = None,
    ):
        """
        Initialize relaunch service

        Args:
            logger: Installer logger
            popen: Process factory (injectable for tests)
            platform: sys.platform override
        """
        self.logger = logger
        self.popen = popen
        self.platform = platform or sys.platform

    def build_command(
        self,
        executable_path: str,
        arguments: Sequence[str],
        credential: RemoteCredential,
        working_directory: str,
    ) -> List[str]:
        """
        PowerShell command line that starts executable_path as credential.

        Raises:
            RelaunchError: On platforms without credentialed process start
        """
        if not self.platform.startswith("win"):
            raise RelaunchError(
                "credentialed relaunch is only supported on Windows",
                context=f"platform: {self.platform}",
            )

        script = _START_PROCESS_SCRIPT.format(
            user=ps_quote(credential.qualified_user),
            file=ps_quote(executable_path),
            arguments=ps_quote(subprocess.list2cmdline(list(arguments))),
            cwd=ps_quote(working_directory),
        )
        encoded = base64.b64encode(script.encode("utf-16-le")).decode("ascii")
        return [
            "powershell.exe",
            "-NoProfile",
            "-NonInteractive",
            "-ExecutionPolicy",
            "Bypass",
            "-EncodedCommand",
            encoded,
        ]

    def relaunch(
        self,
        executable_path: str,
        arguments: Sequence[str],
        credential: RemoteCredential,
        working_directory: Optional[str] = None,
    ) -> RelaunchResult:
        """
        Start the child, wait for it to exit and return everything it printed.

        Never raises: start and communication failures come back in
        RelaunchResult.error.
        """
        cwd = working_directory or "."
        try:
            command = self.build_command(executable_path, arguments, credential, cwd)
            self.logger.verbose(
                f"starting {executable_path} {subprocess.list2cmdline(list(arguments))} "
                f"as {credential.qualified_user}"
            )
            process = self.popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                shell=False,
            )
            stdout, stderr = process.communicate(
                input=credential.password.reveal() + "\n"
            )
        except (OSError, ValueError, subprocess.SubprocessError, RelaunchError) as e:
            return RelaunchResult(error=f"{type(e).__name__} - {e}")

        if stderr:
            self.logger.verbose(f"relaunched installer wrote to stderr: {stderr.strip()}")
        self.logger.verbose(f"relaunched installer exited with code {process.returncode}")
        return RelaunchResult(returncode=process.returncode, output=stdout or "")
