"""Image conditioning for OCR.

Receipt photos are normalized before being handed to Tesseract: capped in
width, converted to greyscale, contrast-stretched and sharpened. This module
has no Flask dependency so it can be used from scripts and workers alike.
"""

from collections.abc import Iterator
from contextlib import contextmanager, suppress
import logging
import os
from pathlib import Path

from PIL import Image, ImageFilter, ImageOps

from .exceptions import PreprocessingError

logger = logging.getLogger(__name__)

DEFAULT_MAX_WIDTH = 2000
PROCESSED_PREFIX = "processed_"


def processed_path_for(image_path: str | os.PathLike[str]) -> Path:
    """Return the path of the temporary artifact written next to the source image."""
    source = Path(image_path)
    return source.with_name(f"{PROCESSED_PREFIX}{source.name}")


def _condition_image(source: Path, output: Path, max_width: int) -> None:
    """Resize, greyscale, normalize and sharpen ``source`` into ``output``.

    Raises:
        PreprocessingError: If the image cannot be read, transformed or written
    """
    try:
        with Image.open(source) as original:
            image_format = original.format
            img = original.copy()

        # Cap width only; never upscale
        if img.width > max_width:
            ratio = max_width / img.width
            new_size = (max_width, max(1, round(img.height * ratio)))
            logger.debug(f"Resizing {source.name} from {img.size} to {new_size}")
            img = img.resize(new_size, Image.Resampling.LANCZOS)

        img = img.convert("L")
        img = ImageOps.autocontrast(img)
        img = img.filter(ImageFilter.SHARPEN)

        img.save(output, format=image_format)
    except Exception as e:
        with suppress(OSError):
            output.unlink(missing_ok=True)
        raise PreprocessingError(f"Failed to preprocess image: {e}", image_path=str(source)) from e


def preprocess_image(image_path: str | os.PathLike[str], max_width: int = DEFAULT_MAX_WIDTH) -> Path:
    """Write an OCR-friendly copy of a receipt image.

    Preprocessing is best-effort: on any failure the original path is
    returned so OCR can still run against the unmodified image.

    Args:
        image_path: Path to the uploaded receipt image
        max_width: Maximum width in pixels; aspect ratio is preserved

    Returns:
        Path to the processed copy, or the original path if preprocessing failed
    """
    source = Path(image_path)
    output = processed_path_for(source)

    try:
        _condition_image(source, output, max_width)
    except PreprocessingError as e:
        logger.warning(f"Image preprocessing failed, using original image: {e.message}")
        return source

    logger.debug(f"Preprocessed {source} -> {output}")
    return output


@contextmanager
def preprocessed_image(image_path: str | os.PathLike[str], max_width: int = DEFAULT_MAX_WIDTH) -> Iterator[Path]:
    """Yield a preprocessed copy of an image and delete it on exit.

    The temporary artifact is removed on every exit path, including
    exceptions raised inside the ``with`` block. The source image is never
    touched.
    """
    source = Path(image_path)
    processed = preprocess_image(source, max_width=max_width)
    try:
        yield processed
    finally:
        if processed != source:
            try:
                processed.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Could not remove preprocessed image {processed}: {e}")
