"""Temporary upload storage: intake checks, guaranteed cleanup, stale sweeps."""

import os
import secrets
import time
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from resume_extractor.config import ExtractorConfig
from resume_extractor.detector import MIME_KINDS
from resume_extractor.exceptions import ValidationError
from resume_extractor.logger import get_logger
from resume_extractor.models import StoredUpload

logger = get_logger(__name__)

# Sweep thresholds for the frequent and the hourly scheduler callbacks
QUICK_SWEEP_AGE = 10 * 60
HOURLY_SWEEP_AGE = 60 * 60

_CHUNK_SIZE = 64 * 1024


def check_upload(
    original_name: str, mime_type: str, size: int, config: Optional[ExtractorConfig] = None
) -> None:
    """Apply the upload allow-list and size limit.

    Raises:
        ValidationError: If the extension or MIME type is not allowed, or the
            file is too large
    """
    config = config or ExtractorConfig()
    suffix = Path(original_name or "").suffix.lower()
    mime = (mime_type or "").split(";", 1)[0].strip().lower()

    if suffix not in config.allowed_extensions or mime not in MIME_KINDS:
        raise ValidationError("Only PDF, DOC, DOCX, and TXT files are allowed")
    if size > config.max_file_size_bytes:
        limit_mb = config.max_file_size_bytes // (1024 * 1024)
        raise ValidationError(f"File size exceeds {limit_mb}MB limit")


def store_upload(
    stream: BinaryIO,
    original_name: str,
    mime_type: str,
    config: Optional[ExtractorConfig] = None,
) -> StoredUpload:
    """Write an incoming file to the upload directory under a unique name.

    The size limit is enforced while copying; a partial file is removed.
    """
    config = config or ExtractorConfig()
    check_upload(original_name, mime_type, 0, config)

    upload_dir = Path(config.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    suffix = Path(original_name).suffix.lower()
    path = upload_dir / f"resume-{int(time.time() * 1000)}-{secrets.token_hex(6)}{suffix}"

    size = 0
    try:
        with open(path, "wb") as out:
            while True:
                chunk = stream.read(_CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > config.max_file_size_bytes:
                    check_upload(original_name, mime_type, size, config)
                out.write(chunk)
    except BaseException:
        cleanup_upload(path)
        raise

    logger.info(
        "Stored upload",
        extra_data={"file_name": original_name, "path": str(path), "file_size_bytes": size},
    )
    return StoredUpload(path=path, original_name=original_name, mime_type=mime_type, size=size)


def cleanup_upload(path: Union[str, Path, None]) -> bool:
    """Delete a temporary upload. Returns False if it was already gone."""
    if not path:
        return False
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.warning(
            "Failed to delete temporary upload",
            extra_data={"path": str(path), "error": str(exc)},
        )
        return False
    logger.debug("Deleted temporary upload", extra_data={"path": str(path)})
    return True


@contextmanager
def processing_upload(upload: StoredUpload) -> Iterator[StoredUpload]:
    """Yield the upload and delete its file on every exit path."""
    try:
        yield upload
    finally:
        cleanup_upload(upload.path)


def sweep_stale_uploads(
    directory: Union[str, Path],
    max_age_seconds: float,
    now: Optional[float] = None,
) -> int:
    """Delete files whose mtime is older than ``max_age_seconds``.

    Best effort: a missing directory, files that vanish mid-sweep and
    per-file errors are skipped. Files younger than the threshold are never
    touched, so the sweep can run next to in-flight uploads.

    Returns:
        Number of files deleted
    """
    directory = Path(directory)
    if not directory.is_dir():
        return 0

    cutoff = (time.time() if now is None else now) - max_age_seconds
    removed = 0

    with os.scandir(directory) as entries:
        for entry in entries:
            try:
                if not entry.is_file(follow_symlinks=False):
                    continue
                if entry.stat(follow_symlinks=False).st_mtime >= cutoff:
                    continue
                os.unlink(entry.path)
                removed += 1
            except FileNotFoundError:
                continue
            except OSError as exc:
                logger.warning(
                    "Failed to sweep upload",
                    extra_data={"path": entry.path, "error": str(exc)},
                )

    if removed:
        logger.info(
            "Swept stale uploads",
            extra_data={
                "directory": str(directory),
                "removed": removed,
                "max_age_seconds": max_age_seconds,
            },
        )
    return removed
