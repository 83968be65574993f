"""Session token storage.

The session token is the only state lana keeps between runs. It lives in
memory on a ``SessionStore`` and is mirrored to a file only the user can
read.
"""

import os
from pathlib import Path
from typing import Protocol


class TokenStorage(Protocol):
    """Durable storage for a single token value."""

    def read(self) -> str | None: ...

    def write(self, token: str) -> None: ...

    def delete(self) -> None: ...


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_token_path() -> Path:
    """Get the default token file path (XDG compliant)."""
    return get_xdg_data_home() / "lana" / "token"


class TokenFile:
    """Token persisted in a file with 0600 permissions.

    A missing file reads as "no token". Other filesystem errors propagate as
    OSError.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else get_token_path()

    def read(self) -> str | None:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def write(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(token)
        os.chmod(self.path, 0o600)

    def delete(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryTokenStorage:
    """Token storage that never touches disk."""

    def __init__(self, token: str | None = None) -> None:
        self.token = token

    def read(self) -> str | None:
        return self.token

    def write(self, token: str) -> None:
        self.token = token

    def delete(self) -> None:
        self.token = None


class SessionStore:
    """Owner of the current session token.

    Keeps one in-memory copy and mirrors every change to durable storage.
    """

    def __init__(self, storage: TokenStorage) -> None:
        self.storage = storage
        self._token: str | None = None

    def set_token(self, token: str | None) -> None:
        """Store a token in memory and durable storage; None clears both.

        Raises:
            OSError: If durable storage cannot be written.
        """
        self._token = token or None
        if self._token:
            self.storage.write(self._token)
        else:
            self.storage.delete()

    def get_token(self) -> str | None:
        """Current token, reading durable storage if memory is empty.

        Raises:
            OSError: If durable storage cannot be read.
        """
        if self._token:
            return self._token
        return self.storage.read()

    def load_token(self) -> str | None:
        """Prime the in-memory token from durable storage.

        Raises:
            OSError: If durable storage cannot be read.
        """
        self._token = self.storage.read()
        return self._token

    def clear(self) -> None:
        """Forget the token (logout)."""
        self.set_token(None)
