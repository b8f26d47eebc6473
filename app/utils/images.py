import io
import logging
from typing import BinaryIO, Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from app.utils.assets import AssetStore
from app.utils.exceptions import PayloadTooLargeError, ProcessingError

logger = logging.getLogger(__name__)


def make_thumbnail(data: bytes, size: int = 128) -> bytes:
    """
    Decode `data`, cover-fit it into a `size` x `size` square and return PNG bytes.

    Cover-fit scales the image until it fills the square and crops the
    overflow around the center, so the aspect ratio is kept.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            img = ImageOps.exif_transpose(img)
            if img.mode not in ("RGB", "RGBA"):
                img = img.convert("RGBA")
            thumb = ImageOps.fit(img, (size, size), method=Image.Resampling.LANCZOS, centering=(0.5, 0.5))
            out = io.BytesIO()
            thumb.save(out, format="PNG")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.error("Image processing failed: %s", e)
        raise ProcessingError()
    return out.getvalue()


def read_limited(source: BinaryIO, max_bytes: Optional[int]) -> bytes:
    data = source.read(max_bytes + 1) if max_bytes is not None else source.read()
    if max_bytes is not None and len(data) > max_bytes:
        raise PayloadTooLargeError(max_bytes)
    return data


def intake_system_image(
    store: AssetStore,
    source: BinaryIO,
    size: int = 128,
    max_bytes: Optional[int] = None,
) -> str:
    """Thumbnail an uploaded icon and store it as PNG; returns the stored filename."""
    data = read_limited(source, max_bytes)
    png = make_thumbnail(data, size)
    return store.store(png, max_bytes=None)


def intake_background(
    store: AssetStore,
    source: BinaryIO,
    original_name: Optional[str],
    max_bytes: Optional[int] = None,
) -> str:
    """Backgrounds are stored byte for byte."""
    return store.store(source, original_name=original_name, max_bytes=max_bytes)
