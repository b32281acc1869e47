"""
Upload service for image batches.
Validates each file independently and stores the accepted ones.
"""

from typing import List, Optional
from fastapi import UploadFile
from urbannest.utils.file_utils import FileValidator, FileStorage
from urbannest.utils.exceptions import (
    FileUploadError,
    ResourceLimitExceededError,
    UploadRejectedError,
)
from urbannest.schemas.upload import UploadResult, UploadSummary, UploadBatchResponse
import uuid
import logging

logger = logging.getLogger(__name__)

STORAGE_FAILURE_MESSAGE = "Upload failed"


class UploadService:
    """
    Service for processing image upload batches.
    Per-file failures are reported in the batch result and never fail the request.
    """

    def __init__(self, validator: FileValidator, storage: FileStorage, max_files: int = 5):
        self.validator = validator
        self.storage = storage
        self.max_files = max_files

    @staticmethod
    def _is_empty_part(file: UploadFile) -> bool:
        # Browsers send a nameless zero-byte part for an untouched file input
        return not file.filename and not file.size

    def check_batch(self, files: Optional[List[UploadFile]]) -> List[UploadFile]:
        """
        Apply batch-level limits before any file is read.

        Args:
            files: Parts received under the multipart "files" field

        Returns:
            Non-empty parts, in request order

        Raises:
            FileUploadError: If no files were sent
            ResourceLimitExceededError: If more files were sent than allowed
        """
        parts = [f for f in (files or []) if not self._is_empty_part(f)]

        if not parts:
            raise FileUploadError("No files uploaded")

        if len(parts) > self.max_files:
            raise ResourceLimitExceededError(f"Maximum {self.max_files} files allowed per request")

        return parts

    async def process_file(self, user_id: uuid.UUID, file: UploadFile) -> UploadResult:
        """
        Validate and store a single file.

        Args:
            user_id: Uploading user's id
            file: Uploaded file

        Returns:
            Per-file result with the public URL or the rejection reason
        """
        result = UploadResult(success=False, file_name=file.filename)

        try:
            content = await self.validator.read_limited(file)
            self.validator.validate(content, file.content_type)
        except UploadRejectedError as e:
            logger.warning(f"File {file.filename} rejected: {e.detail}", extra={"reason": e.reason})
            result.error = e.detail
            return result

        extension = self.validator.sanitize_extension(file.filename)
        storage_name = self.storage.build_storage_name(user_id, extension)

        try:
            await self.storage.save_bytes(storage_name, content)
        except OSError as e:
            logger.error(f"Upload failed for {file.filename}: {e}")
            result.error = STORAGE_FAILURE_MESSAGE
            return result

        result.success = True
        result.url = self.storage.public_url(storage_name)
        logger.debug(f"Stored upload {storage_name}")
        return result

    async def process_batch(
        self,
        user_id: uuid.UUID,
        files: Optional[List[UploadFile]]
    ) -> UploadBatchResponse:
        """
        Validate and store a batch of files sequentially.

        Args:
            user_id: Uploading user's id
            files: Parts received under the multipart "files" field

        Returns:
            Results in request order plus a summary

        Raises:
            FileUploadError: If no files were sent
            ResourceLimitExceededError: If more files were sent than allowed
        """
        parts = self.check_batch(files)

        results = [await self.process_file(user_id, file) for file in parts]

        successful = sum(1 for r in results if r.success)
        summary = UploadSummary(
            total=len(results),
            successful=successful,
            failed=len(results) - successful
        )

        logger.info(
            f"Upload complete: {summary.successful} succeeded, {summary.failed} failed",
            extra={"user_id": str(user_id), "total": summary.total}
        )
        return UploadBatchResponse(results=results, summary=summary)
