import random
import re
import time
from pathlib import Path
from typing import Optional
from fastapi import UploadFile
from src.core.configs import settings
from src.core.errors import AssetStorageError, FieldValidationError
from src.utils.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


def upload_root() -> Path:
    path = Path(settings.upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _allowed_pattern() -> re.Pattern:
    return re.compile("|".join(settings.allowed_image_extensions))


def has_upload(image: Optional[UploadFile]) -> bool:
    """Browsers send an empty file part when no file was picked."""
    return image is not None and bool(image.filename)


def validate_image(image: UploadFile) -> None:
    """
    Accept an upload only when both its extension and MIME type name an
    allowed image format.

    Raises:
        FieldValidationError: If the file is not an accepted image type
    """
    pattern = _allowed_pattern()
    extension = Path(image.filename).suffix.lower()
    content_type = (image.content_type or "").lower()

    if not (extension and pattern.search(extension) and pattern.search(content_type)):
        raise FieldValidationError("Only image files are allowed")


def generate_filename(original_name: str) -> str:
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9 - 1)}"
    return f"animal-{unique_suffix}{Path(original_name).suffix.lower()}"


def save_image(image: UploadFile) -> str:
    """
    Validate and write an uploaded image to the asset store.

    Args:
        image: The multipart upload

    Returns:
        str: Relative URL stored on the animal record, e.g. ``/uploads/animal-...png``

    Raises:
        FieldValidationError: Wrong file type or larger than the size cap
        AssetStorageError: The file could not be written
    """
    validate_image(image)

    filename = generate_filename(image.filename)
    target = upload_root() / filename
    limit = settings.max_upload_size_bytes
    written = 0

    try:
        image.file.seek(0)
        with target.open("wb") as out:
            while True:
                chunk = image.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > limit:
                    break
                out.write(chunk)
    except OSError as e:
        target.unlink(missing_ok=True)
        logger.error(f"Error writing upload {filename}: {e}")
        raise AssetStorageError() from e

    if written > limit:
        target.unlink(missing_ok=True)
        raise FieldValidationError(
            f"Image exceeds the {limit // (1024 * 1024)} MB limit"
        )

    logger.info(f"Stored image {filename} ({written} bytes)")
    return f"{settings.upload_url_prefix}/{filename}"


def resolve_image_path(image_url: str) -> Path:
    # only the file name is trusted, so a stored path can never escape upload_dir
    return Path(settings.upload_dir) / Path(image_url).name


def delete_image(image_url: Optional[str]) -> bool:
    """
    Best-effort removal of a stored image.

    A missing file is not an error and removal failures are only logged,
    so cleanup never aborts the record operation that triggered it.

    Returns:
        bool: True if a file was removed
    """
    if not image_url:
        return False

    path = resolve_image_path(image_url)
    try:
        path.unlink()
    except FileNotFoundError:
        logger.debug(f"Image {path} already absent")
        return False
    except OSError as e:
        logger.warning(f"Could not delete image {path}: {e}")
        return False

    logger.info(f"Deleted image {path}")
    return True

