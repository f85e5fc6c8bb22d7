"""
Credential Models

Opaque secret storage and the two credential shapes the installer accepts.
"""

from dataclasses import dataclass
from typing import Optional


class SecretValue:
    """
    Password held as a clearable byte buffer.

    The value never shows up in str(), repr() or format strings. It is marked
    read-only once built and zeroed by clear(), on context-manager exit and
    when the object is collected. Only reveal() hands the plain text back.
    """

    __slots__ = ("_buffer", "_read_only", "_cleared")

    _MASK = "********"

    def __init__(self, value: str):
        self._buffer = bytearray(value.encode("utf-8"))
        self._read_only = False
        self._cleared = False

    @classmethod
    def from_plain(cls, value: str) -> "SecretValue":
        """Wrap a plain string and seal it."""
        secret = cls(value)
        secret.make_read_only()
        return secret

    def make_read_only(self) -> None:
        self._read_only = True

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def append(self, text: str) -> None:
        """Append characters before the secret is sealed."""
        if self._read_only:
            raise ValueError("SecretValue is read-only")
        self._buffer.extend(text.encode("utf-8"))

    def reveal(self) -> str:
        """Return the plain text. Keep the result's lifetime as short as possible."""
        if self.is_cleared:
            raise ValueError("SecretValue has been cleared")
        return self._buffer.decode("utf-8")

    def clear(self) -> None:
        """Overwrite and drop the buffer."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        del self._buffer[:]
        self._cleared = True

    def __len__(self) -> int:
        return len(self._buffer)

    def __bool__(self) -> bool:
        return not self.is_cleared

    def __str__(self) -> str:
        return self._MASK

    def __repr__(self) -> str:
        return f"SecretValue({self._MASK})"

    def __format__(self, format_spec: str) -> str:
        return self._MASK

    def __reduce__(self):
        raise TypeError("SecretValue cannot be pickled")

    def __enter__(self) -> "SecretValue":
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        self.clear()
        return False

    def __del__(self):
        if hasattr(self, "_buffer"):
            self.clear()


@dataclass(frozen=True)
class AdminTarget:
    """Machine and user for the unattended admin install."""

    raised: bool = False
    machine: Optional[str] = None
    user: Optional[str] = None

    def __repr__(self) -> str:
        return f"AdminTarget(raised={self.raised}, machine={self.machine}, user={self.user})"


@dataclass(frozen=True)
class RemoteCredential:
    """Windows logon used for the manifest-only relaunch."""

    username: str
    password: SecretValue
    domain: str

    @property
    def qualified_user(self) -> str:
        """DOMAIN\\user form expected by the logon APIs."""
        return f"{self.domain}\\{self.username}"

    def __repr__(self) -> str:
        return f"RemoteCredential(user={self.qualified_user})"
