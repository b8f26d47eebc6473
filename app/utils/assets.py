"""
Filesystem asset namespaces.

Each namespace is a flat directory of image files. Names are always generated
server side and every path handed in by a client goes through `resolve()`,
which refuses anything that would land outside the namespace root.
"""

import io
import logging
import os
import random
import re
import tempfile
import time
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from app.config.settings import settings
from app.utils.exceptions import PayloadTooLargeError, StorageError, ValidationError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif")
IMAGE_NAME_RE = re.compile(r"\.(jpg|jpeg|png|webp|gif)$", re.IGNORECASE)
CHUNK_SIZE = 1024 * 1024


class AssetStore:
    def __init__(self, root: Union[str, Path], prefix: str, fixed_extension: Optional[str] = None):
        self.root = Path(root)
        self.prefix = prefix
        self.fixed_extension = fixed_extension

    def ensure_dir(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def list(self) -> List[str]:
        """Image filenames in the namespace; empty if the directory can't be read."""
        try:
            names = os.listdir(self.root)
        except OSError as e:
            logger.warning("Could not list %s: %s", self.root, e)
            return []
        return sorted(n for n in names if IMAGE_NAME_RE.search(n) and not n.startswith("."))

    def generate_name(self, original_name: Optional[str] = None) -> str:
        if self.fixed_extension:
            ext = self.fixed_extension
        else:
            ext = os.path.splitext(os.path.basename(original_name or ""))[1].lower() or ".jpg"
            if ext not in IMAGE_EXTENSIONS:
                raise ValidationError(f"Unsupported file type: {ext}")
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return f"{self.prefix}-{unique_suffix}{ext}"

    def resolve(self, filename: str) -> Path:
        """Path of `filename` inside the namespace, or ValidationError."""
        if not filename or filename in (".", "..") or ".." in filename:
            raise ValidationError("Invalid path")
        if "/" in filename or "\\" in filename or "\x00" in filename or os.path.isabs(filename):
            raise ValidationError("Invalid path")

        root = self.root.resolve()
        target = (root / filename).resolve()
        # Flat namespace: the file must sit directly in the root, symlinks included
        if target.parent != root:
            raise ValidationError("Invalid path")
        return target

    def exists(self, filename: str) -> bool:
        try:
            return self.resolve(filename).is_file()
        except ValidationError:
            return False

    def store(
        self,
        source: Union[bytes, BinaryIO],
        original_name: Optional[str] = None,
        max_bytes: Optional[int] = None,
    ) -> str:
        """
        Write `source` under a freshly generated name and return that name.

        Data goes to a hidden temp file first and is linked into place only
        once complete, so a failed or oversized upload never leaves a file
        under a name that could be referenced.
        """
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)

        filename = self.generate_name(original_name)
        target = self.root / filename
        self.ensure_dir()

        fd, tmp_path = tempfile.mkstemp(prefix=".upload-", suffix=".part", dir=self.root)
        try:
            written = 0
            with os.fdopen(fd, "wb") as tmp:
                while True:
                    chunk = source.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if max_bytes is not None and written > max_bytes:
                        raise PayloadTooLargeError(max_bytes)
                    tmp.write(chunk)
            # link() refuses an existing name, so nothing is ever overwritten
            while True:
                try:
                    os.link(tmp_path, target)
                    break
                except FileExistsError:
                    filename = self.generate_name(original_name)
                    target = self.root / filename
            _discard(tmp_path)
        except PayloadTooLargeError:
            _discard(tmp_path)
            logger.warning("Rejected upload over %d bytes for %s", max_bytes, self.root)
            raise
        except OSError as e:
            _discard(tmp_path)
            logger.error("Failed writing %s: %s", target, e, exc_info=True)
            raise StorageError("Could not save file")

        logger.info("Stored %s (%d bytes)", target, written)
        return filename

    def delete(self, filename: str) -> None:
        try:
            path = self.resolve(filename)
        except ValidationError:
            logger.warning("Rejected deletion outside %s: %r", self.root, filename)
            raise
        try:
            path.unlink()
        except OSError as e:
            logger.error("Failed deleting %s: %s", path, e)
            raise StorageError("Error deleting file")
        logger.info("Deleted %s", path)


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


def get_background_store() -> AssetStore:
    return AssetStore(settings.backgrounds_dir, prefix="bg")


def get_system_image_store() -> AssetStore:
    return AssetStore(settings.system_images_dir, prefix="sys", fixed_extension=".png")
