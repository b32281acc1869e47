"""
File upload utilities for handling image validation and storage.
Validates size, declared type and magic-byte signature, and writes accepted
images under a per-user directory.
"""

import os
import uuid
import time
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union
import aiofiles
from fastapi import UploadFile

from urbannest.utils.exceptions import (
    FileSizeExceededError,
    UnsupportedFileTypeError,
    SignatureMismatchError,
)

DEFAULT_ALLOWED_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")

# Shortest buffer that can carry every supported signature
MIN_SIGNATURE_LENGTH = 12


class FileValidator:
    """Utility class for upload validation operations."""

    # Leading bytes expected for each declared content type
    SIGNATURES: Dict[str, Tuple[Tuple[int, bytes], ...]] = {
        "image/jpeg": ((0, b"\xff\xd8\xff"),),
        "image/jpg": ((0, b"\xff\xd8\xff"),),
        "image/png": ((0, b"\x89PNG\r\n\x1a\n"),),
        "image/webp": ((0, b"RIFF"), (8, b"WEBP")),
    }

    ALLOWED_EXTENSIONS = ("jpg", "jpeg", "png", "webp")
    DEFAULT_EXTENSION = "jpg"

    def __init__(
        self,
        max_size: int = 5 * 1024 * 1024,
        allowed_types: Iterable[str] = DEFAULT_ALLOWED_TYPES
    ):
        self.max_size = max_size
        self.allowed_types = tuple(allowed_types)

    async def read_limited(self, file: UploadFile) -> bytes:
        """
        Read an uploaded file, never buffering more than one byte past the limit.

        Args:
            file: FastAPI UploadFile object

        Returns:
            File content, at most max_size + 1 bytes
        """
        await file.seek(0)
        return await file.read(self.max_size + 1)

    def validate_size(self, content: bytes) -> None:
        """
        Raises:
            FileSizeExceededError: If content is larger than the limit
        """
        if len(content) > self.max_size:
            raise FileSizeExceededError(self.max_size)

    def validate_content_type(self, content_type: Optional[str]) -> str:
        """
        Validate the declared MIME type.

        Args:
            content_type: Content type sent by the client

        Returns:
            Normalized MIME type

        Raises:
            UnsupportedFileTypeError: If the type is not an allowed image type
        """
        mime_type = (content_type or "").split(";")[0].strip().lower()
        if mime_type not in self.allowed_types:
            raise UnsupportedFileTypeError(content_type or "unknown")
        return mime_type

    @classmethod
    def matches_signature(cls, content: bytes, mime_type: str) -> bool:
        """Check the leading bytes of content against the declared type."""
        if len(content) < MIN_SIGNATURE_LENGTH:
            return False

        signature = cls.SIGNATURES.get(mime_type)
        if not signature:
            return False

        return all(
            content[offset:offset + len(magic)] == magic
            for offset, magic in signature
        )

    def validate_signature(self, content: bytes, mime_type: str) -> None:
        """
        Raises:
            SignatureMismatchError: If the bytes do not match the declared type
        """
        if not self.matches_signature(content, mime_type):
            raise SignatureMismatchError()

    def validate(self, content: bytes, content_type: Optional[str]) -> str:
        """
        Run size, declared type and signature checks in that order.

        Args:
            content: File bytes as returned by read_limited
            content_type: Declared MIME type

        Returns:
            Normalized MIME type

        Raises:
            UploadRejectedError: Subclass describing the first failed check
        """
        self.validate_size(content)
        mime_type = self.validate_content_type(content_type)
        self.validate_signature(content, mime_type)
        return mime_type

    @classmethod
    def sanitize_extension(cls, filename: Optional[str]) -> str:
        """
        Pick the stored file extension from the client's filename.

        Args:
            filename: Original filename, may be missing

        Returns:
            Lowercase extension if allowed, otherwise the default "jpg"
        """
        if not filename or "." not in filename:
            return cls.DEFAULT_EXTENSION

        extension = filename.rsplit(".", 1)[-1].lower()
        if extension in cls.ALLOWED_EXTENSIONS:
            return extension
        return cls.DEFAULT_EXTENSION


class FileStorage:
    """Utility class for file storage operations."""

    def __init__(
        self,
        base_dir: Union[str, Path],
        url_path: str = "/uploads",
        public_base_url: str = ""
    ):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.url_path = "/" + url_path.strip("/")
        self.public_base_url = public_base_url.rstrip("/")

    @staticmethod
    def build_storage_name(user_id: uuid.UUID, extension: str) -> str:
        """
        Generate a collision-resistant storage name scoped to the uploader.

        Args:
            user_id: Uploading user's id
            extension: Sanitized file extension

        Returns:
            Name of the form "<user_id>/<epoch_ms>-<8 hex>.<ext>"
        """
        epoch_ms = int(time.time() * 1000)
        suffix = uuid.uuid4().hex[:8]
        return f"{user_id}/{epoch_ms}-{suffix}.{extension}"

    def resolve(self, storage_name: str) -> Path:
        """Absolute path of a stored file."""
        return self.base_dir / storage_name

    async def save_bytes(self, storage_name: str, content: bytes) -> int:
        """
        Save file content to disk.

        Args:
            storage_name: Name returned by build_storage_name
            content: File bytes

        Returns:
            Number of bytes written

        Raises:
            OSError: If the file cannot be written
        """
        file_path = self.resolve(storage_name)

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)

            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)

            return len(content)

        except OSError:
            # Remove a partially written file before reporting the failure
            if file_path.exists():
                os.remove(file_path)
            raise

    def public_url(self, storage_name: str) -> str:
        """Public URL under which the stored file is served."""
        return f"{self.public_base_url}{self.url_path}/{storage_name}"
