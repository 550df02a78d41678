"""Ingest module: decode image files into RGBA pixel buffers."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from shotgrade.scoring.types import PixelBuffer, ShotgradeError

logger = logging.getLogger(__name__)

# Decoders the analysis is calibrated for
ACCEPTED_FORMATS = frozenset({"JPEG", "PNG"})
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})


class UnsupportedImageError(ShotgradeError, ValueError):
    """File is not a decodable JPEG or PNG image."""


def load_image(path: Path | str, max_dim: int | None = None) -> PixelBuffer:
    """Open an image file and decode it to an RGBA pixel buffer.

    Args:
        path: Path to a JPEG or PNG file.
        max_dim: If given, downscale so neither side exceeds it.

    Returns:
        PixelBuffer in display orientation.

    Raises:
        UnsupportedImageError: If the file is not a JPEG/PNG image.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            if img.format not in ACCEPTED_FORMATS:
                raise UnsupportedImageError(
                    f"{path.name}: unsupported format {img.format or 'unknown'}"
                )
            img.load()
            buffer = buffer_from_image(img, max_dim=max_dim)
    except UnidentifiedImageError as e:
        raise UnsupportedImageError(f"{path.name}: not a recognized image") from e

    logger.info("Loaded %s (%dx%d)", path.name, buffer.width, buffer.height)
    return buffer


def buffer_from_image(img: Image.Image, max_dim: int | None = None) -> PixelBuffer:
    """Convert an in-memory PIL image to a PixelBuffer.

    Applies EXIF orientation before any resize, then converts to RGBA.

    Raises:
        ValueError: If max_dim is less than 1.
    """
    if max_dim is not None and max_dim < 1:
        raise ValueError(f"max_dim must be >= 1, got {max_dim}")
    img = _auto_orient(img)
    if max_dim is not None:
        img = _resize_if_needed(img, max_dim)
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    width, height = img.size
    return PixelBuffer(width=width, height=height, pixels=img.tobytes())


def _resize_if_needed(img: Image.Image, max_size: int) -> Image.Image:
    """Resize image if larger than max_size, preserving aspect ratio."""
    w, h = img.size
    if w <= max_size and h <= max_size:
        return img

    if w > h:
        new_w = max_size
        new_h = max(1, int(h * max_size / w))
    else:
        new_h = max_size
        new_w = max(1, int(w * max_size / h))

    return img.resize((new_w, new_h), Image.Resampling.LANCZOS)


def _auto_orient(img: Image.Image) -> Image.Image:
    """Auto-rotate image based on EXIF orientation tag.

    Position-based passes (composition grid, aspect ratio for the
    classifier) need the image the way it is displayed.
    """
    try:
        exif = img.getexif()
        if not exif:
            return img

        # Orientation is tag 274
        orientation = exif.get(274)
        if orientation is None:
            return img

        if orientation == 2:
            return img.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
        elif orientation == 3:
            return img.rotate(180, expand=True)
        elif orientation == 4:
            return img.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        elif orientation == 5:
            return img.transpose(Image.Transpose.TRANSPOSE)
        elif orientation == 6:
            return img.rotate(270, expand=True)
        elif orientation == 7:
            return img.transpose(Image.Transpose.TRANSVERSE)
        elif orientation == 8:
            return img.rotate(90, expand=True)
        else:
            return img
    except (AttributeError, KeyError, IndexError):
        return img


def find_image_files(
    directory: Path,
    extensions: frozenset[str] | None = None,
) -> list[Path]:
    """Find all image files in directory (recursive, sorted).

    Args:
        directory: Root directory to scan.
        extensions: Set of extensions to match (lowercase, with dot).
                   Defaults to IMAGE_EXTENSIONS.

    Returns:
        Sorted list of matching paths.
    """
    if extensions is None:
        extensions = IMAGE_EXTENSIONS

    return sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lower() in extensions
    )


def parse_extensions(ext_arg: str) -> frozenset[str]:
    """Parse comma-separated extensions into a frozenset."""
    exts = []
    for e in ext_arg.split(","):
        e = e.strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            e = "." + e
        exts.append(e)
    return frozenset(exts)
