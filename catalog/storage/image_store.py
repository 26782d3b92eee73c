"""
Image store - content-addressed image files under a root directory.
Challenge: Idempotent writes under retries and duplicate uploads; no torn files.
Design: The file name is the SHA-256 of the bytes, so equal content maps to one
file. Bytes go to a temp file in the same directory and are renamed into place.
"""

import asyncio
import contextlib
import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from catalog.core.exceptions import ImageNotFound, ImageWriteFailed, InvalidInput

logger = logging.getLogger(__name__)


def content_name(data: bytes, extension: str = ".jpg", algorithm: str = "sha256") -> str:
    """Deterministic storage name for ``data``."""
    h = hashlib.new(algorithm)
    h.update(data)
    return h.hexdigest() + extension


class ImageStore(Protocol):
    async def put(self, data: bytes) -> str:
        """Store ``data`` and return its name. Raises ImageWriteFailed."""
        ...


class LocalImageStore:
    """ImageStore over a flat directory. The directory is created on first write."""

    def __init__(self, root: str | Path, extension: str = ".jpg"):
        self.root = Path(root)
        self.extension = extension

    async def put(self, data: bytes) -> str:
        name = content_name(data, self.extension)
        try:
            await asyncio.to_thread(self._write, name, data)
        except OSError as exc:
            logger.warning("images.put failed for %s: %s", name, exc)
            raise ImageWriteFailed("images.put", exc) from exc
        return name

    def path(self, name: str) -> Path:
        """Resolve a stored image to its file. Only bare names with our extension are accepted."""
        if not name or Path(name).name != name or name.startswith("."):
            raise InvalidInput(f"invalid image name: {name!r}", operation="images.path")
        if not name.endswith(self.extension):
            raise InvalidInput(f"image name must end with {self.extension}", operation="images.path")
        target = self.root / name
        if not target.is_file():
            raise ImageNotFound(name)
        return target

    async def read(self, name: str) -> bytes:
        return await asyncio.to_thread(self.path(name).read_bytes)

    def _write(self, name: str, data: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        target = self.root / name
        if target.exists():
            # Same name means same content
            return
        fd, tmp_path = tempfile.mkstemp(dir=self.root, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, target)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_path)
            raise
        logger.debug("stored image %s (%d bytes)", name, len(data))


class InMemoryImageStore:
    """ImageStore kept in a dict. For unit tests."""

    def __init__(self, extension: str = ".jpg"):
        self.extension = extension
        self.images: dict[str, bytes] = {}

    async def put(self, data: bytes) -> str:
        name = content_name(data, self.extension)
        self.images.setdefault(name, data)
        return name

    async def read(self, name: str) -> bytes:
        if name not in self.images:
            raise ImageNotFound(name)
        return self.images[name]
