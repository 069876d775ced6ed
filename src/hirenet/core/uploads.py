"""Allow-list and size checks for multipart uploads, plus storage under the upload directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from fastapi import HTTPException, UploadFile

from hirenet.config import Settings

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class UploadPolicy:
    label: str
    extensions: tuple[str, ...]
    max_bytes: int

    def describe_extensions(self) -> str:
        names = [ext.lstrip(".").upper() for ext in self.extensions]
        if len(names) == 1:
            return names[0]
        return f"{', '.join(names[:-1])}, and {names[-1]}"

    def describe_size(self) -> str:
        megabytes = self.max_bytes / (1024 * 1024)
        return f"{megabytes:g}MB"


def resume_policy(settings: Settings) -> UploadPolicy:
    return UploadPolicy("resume", tuple(settings.resume_extension_list), settings.resume_max_bytes)


def image_policy(settings: Settings) -> UploadPolicy:
    return UploadPolicy("image", tuple(settings.image_extension_list), settings.image_max_bytes)


def get_file_extension(filename: str) -> str:
    return Path(filename).suffix.lower()


def check_extension(filename: str | None, policy: UploadPolicy) -> str:
    if not filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    ext = get_file_extension(filename)
    if ext not in policy.extensions:
        raise HTTPException(
            status_code=400,
            detail=f"Only {policy.describe_extensions()} files are allowed for {policy.label} uploads",
        )
    return ext


def read_limited(file: UploadFile, policy: UploadPolicy) -> bytes:
    """Read the upload body, failing as soon as it grows past the policy cap."""
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = file.file.read(_CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > policy.max_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File too large. Maximum {policy.label} size is {policy.describe_size()}",
            )
        chunks.append(chunk)
    return b"".join(chunks)


def store_upload(file: UploadFile, policy: UploadPolicy, directory: Path) -> str:
    """Validate ``file`` against ``policy`` and persist it; returns the public ``/uploads/...`` path."""
    ext = check_extension(file.filename, policy)
    content = read_limited(file, policy)

    directory.mkdir(parents=True, exist_ok=True)
    stored_name = f"{policy.label}-{uuid4().hex}{ext}"
    (directory / stored_name).write_bytes(content)
    logger.info("stored %s upload %s (%d bytes)", policy.label, stored_name, len(content))
    return f"/uploads/{stored_name}"


def discard_upload(url: str, directory: Path) -> None:
    """Remove a file previously returned by ``store_upload``."""
    path = directory / url.rsplit("/", 1)[-1]
    path.unlink(missing_ok=True)
    logger.info("discarded upload %s", path.name)
