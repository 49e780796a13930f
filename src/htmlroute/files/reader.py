"""Safe file reader — resolves file references inside a root directory.

Every reference is resolved against the configured root (symlinks
included) and rejected unless the result is the root itself or lies
beneath it by path components.  A sibling such as ``html-private`` is
never treated as inside ``html``.

Blocking filesystem calls run in an anyio worker thread.
"""

import logging
import stat as stat_mode
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Any

from anyio import to_thread

from htmlroute.errors import FileNotFound, InvalidPath

logger = logging.getLogger("htmlroute.files")


def _run_sync(func: Callable[..., Any], *args: Any) -> Any:
    """Run blocking call in anyio worker thread."""
    return to_thread.run_sync(func, *args)


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Metadata for a file under the root."""

    path: Path
    size: int
    modified: float


def _is_absolute(reference: str) -> bool:
    # Windows forms are rejected on every platform: "C:\x", "C:x", "\\host\share", "\x"
    if reference.startswith(("/", "\\")):
        return True
    return bool(PureWindowsPath(reference).drive) or Path(reference).is_absolute()


class SafeFileReader:
    """Reads HTML files from a root directory, refusing anything outside it.

    Usage::

        reader = SafeFileReader("./html")
        html = await reader.read("index.html")
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, file: str) -> Path:
        """Resolve *file* to an absolute path inside the root.

        Raises ``InvalidPath`` for absolute references and for anything
        that resolves outside the root.
        """
        if _is_absolute(file):
            raise InvalidPath(file, "Absolute file path is not allowed")

        try:
            candidate = (self._root / file).resolve()
        except (OSError, ValueError) as exc:
            raise InvalidPath(file, f"Unresolvable file path: {exc}") from exc

        if not candidate.is_relative_to(self._root):
            logger.warning("Rejected path traversal attempt: %r", file)
            raise InvalidPath(file, "Path traversal is not allowed")
        return candidate

    async def read(self, file: str) -> str:
        """Return the full UTF-8 contents of *file*.

        Bytes are decoded without newline translation. Raises
        ``FileNotFound`` when nothing readable exists at the reference;
        other ``OSError``s propagate.
        """
        path = self.resolve(file)
        try:
            data: bytes = await _run_sync(path.read_bytes)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as exc:
            raise FileNotFound(file) from exc
        return data.decode("utf-8")

    async def exists(self, file: str) -> bool:
        """Whether *file* is a regular file inside the root. Never raises."""
        try:
            path = self.resolve(file)
        except InvalidPath:
            return False
        try:
            return bool(await _run_sync(path.is_file))
        except OSError:
            return False

    async def stat(self, file: str) -> FileInfo:
        """Return size and modification time for *file*.

        Raises ``InvalidPath`` or ``FileNotFound`` like ``read()``, so a
        directory is reported as missing.
        """
        path = self.resolve(file)
        try:
            st = await _run_sync(path.stat)
        except (FileNotFoundError, NotADirectoryError) as exc:
            raise FileNotFound(file) from exc
        if stat_mode.S_ISDIR(st.st_mode):
            raise FileNotFound(file)
        return FileInfo(path=path, size=st.st_size, modified=st.st_mtime)
