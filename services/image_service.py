"""
Image validation and compression for recipe photos.

Uploaded images are checked for type and size, decoded through Pillow
(which rejects corrupted or fake files), downsized to fit the configured
maximum edge and re-encoded. When the first pass is still above the target
size a second, more aggressive pass is made.
"""

import logging
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image

from app.config import settings
from app.exceptions import ServiceValidationError

logger = logging.getLogger("lechef.images")

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}

# Pillow format name -> content type we store
_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
}


def check_upload_size(size: int) -> None:
    if size > settings.max_upload_bytes:
        raise ServiceValidationError(
            f"File is too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB."
        )


def validate_image(content_type: Optional[str], size: int) -> None:
    """Reject unsupported types and files over the pre-compression limit"""
    if (content_type or "").split(";")[0].strip().lower() not in ALLOWED_CONTENT_TYPES:
        raise ServiceValidationError(
            "Invalid file type. Please upload a JPEG, PNG, or WebP image."
        )
    check_upload_size(size)


def _flatten(img: Image.Image) -> Image.Image:
    """Paste transparent images onto white so they can be saved as JPEG"""
    if img.mode in ("RGBA", "LA", "P"):
        if img.mode == "P":
            img = img.convert("RGBA")
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def _encode(img: Image.Image, fmt: str, quality: int) -> bytes:
    buffer = BytesIO()
    if fmt == "PNG":
        img.save(buffer, "PNG", optimize=True)
    elif fmt == "WEBP":
        img.save(buffer, "WEBP", quality=quality)
    else:
        _flatten(img).save(buffer, "JPEG", quality=quality, optimize=True)
    return buffer.getvalue()


def compress_image(data: bytes, content_type: Optional[str] = None) -> Tuple[bytes, str]:
    """Validate, downsize and recompress an image.

    Args:
        data: raw image bytes
        content_type: declared content type of the upload

    Returns:
        (compressed bytes, content type of the compressed bytes)

    Raises:
        ServiceValidationError: wrong type, too large, or not a decodable image
    """
    validate_image(content_type, len(data))

    try:
        img = Image.open(BytesIO(data))
        img.verify()
        # verify() leaves the image unusable, reopen
        img = Image.open(BytesIO(data))
        img.load()
    except Image.DecompressionBombError:
        raise ServiceValidationError("Image is too large when decoded")
    except Exception as e:
        raise ServiceValidationError(f"Invalid or corrupted image: {e}")

    fmt = img.format if img.format in _FORMATS else "JPEG"
    max_edge = settings.max_image_width
    if img.width > max_edge or img.height > max_edge:
        img.thumbnail((max_edge, max_edge), Image.Resampling.LANCZOS)

    out = _encode(img, fmt, settings.image_quality)
    if len(out) > settings.max_image_bytes:
        # PNG has no quality knob, fall back to JPEG for the second pass
        if fmt == "PNG":
            fmt = "JPEG"
        out = _encode(img, fmt, settings.image_fallback_quality)

    logger.info(
        "Compressed image %d -> %d bytes (%s, %dx%d)",
        len(data), len(out), fmt, img.width, img.height,
    )
    return out, _FORMATS[fmt]
