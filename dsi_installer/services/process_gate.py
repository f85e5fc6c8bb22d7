"""Process gate: block until the host application has exited."""

import time
from typing import Callable, List, Optional

import psutil

from dsi_installer.constants import GATE_POLL_INTERVAL_SECONDS, MSG_HOST_RUNNING
from dsi_installer.logger import InstallerLogger


def poll_until(
    predicate: Callable[[], bool],
    interval: float,
    sleeper: Callable[[float], None] = time.sleep,
    on_wait: Optional[Callable[[int], None]] = None,
) -> int:
    """
    Call predicate until it returns True, sleeping interval seconds in between.

    There is no timeout. on_wait is called with the 1-based attempt number
    before every sleep.

    Returns:
        Number of sleeps performed (0 if predicate was true right away)
    """
    attempts = 0
    while not predicate():
        attempts += 1
        if on_wait is not None:
            on_wait(attempts)
        sleeper(interval)
    return attempts


def list_process_names() -> List[str]:
    """Names of all processes visible to the current user."""
    names = []
    for proc in psutil.process_iter(["name"]):
        name = proc.info.get("name")
        if name:
            names.append(name)
    return names


class ProcessGate:
    """Waits until no process with the host application's name is running."""

    def __init__(
        self,
        logger: InstallerLogger,
        interval: float = GATE_POLL_INTERVAL_SECONDS,
        process_lister: Callable[[], List[str]] = list_process_names,
        sleeper: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize process gate

        Args:
            logger: Installer logger
            interval: Seconds between checks
            process_lister: Returns the current process names
            sleeper: Sleep function (injectable for tests)
        """
        self.logger = logger
        self.interval = interval
        self.process_lister = process_lister
        self.sleeper = sleeper

    @staticmethod
    def _matches(candidate: str, process_name: str) -> bool:
        name = candidate.lower()
        if name.endswith(".exe"):
            name = name[: -len(".exe")]
        return name == process_name.lower()

    def running_count(self, process_name: str) -> int:
        """Number of running processes named process_name."""
        return sum(
            1 for name in self.process_lister() if self._matches(name, process_name)
        )

    def wait_until_clear(self, process_name: str) -> int:
        """
        Block until no process named process_name is running.

        Returns:
            Number of 5-second waits that were needed
        """

        def announce(attempt: int) -> None:
            self.logger.log(MSG_HOST_RUNNING.format(process=process_name, attempt=attempt))
            self.logger.verbose(
                f"sleeping for {self.interval:g} seconds; total time spent sleeping "
                f"is {(attempt - 1) * self.interval:g} seconds"
            )

        waits = poll_until(
            lambda: self.running_count(process_name) == 0,
            self.interval,
            sleeper=self.sleeper,
            on_wait=announce,
        )
        if waits:
            self.logger.verbose(f"{process_name} has exited; continuing")
        return waits
