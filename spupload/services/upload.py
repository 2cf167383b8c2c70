"""Upload operations for SharePoint Uploader (spupload)."""

import logging

from spupload.core.config import CHUNK_SIZE, CHUNK_SIZE_UNIT, SMALL_FILE_THRESHOLD
from spupload.core.exceptions import (
    ChunkTransferError,
    GraphApiError,
    LocalFileError,
    SessionCreationError,
    SharePointUploadError,
)

logger = logging.getLogger(__name__)


class SharePointUploader:
    """Uploads file content into a folder, picking a single PUT or an upload session by size."""

    def __init__(self, client, chunk_size=CHUNK_SIZE, threshold=SMALL_FILE_THRESHOLD, stats=None):
        """Initialize with a GraphClient instance."""
        if chunk_size <= 0 or chunk_size % CHUNK_SIZE_UNIT:
            raise ValueError(
                f"chunk_size must be a positive multiple of {CHUNK_SIZE_UNIT} bytes, got {chunk_size}"
            )
        self.client = client
        self.chunk_size = chunk_size
        self.threshold = threshold
        self.stats = stats

    def use_upload_session(self, file_size):
        """Files at or above the threshold go through an upload session."""
        return file_size >= self.threshold

    def upload(
        self, drive_id, folder_id, file_name, stream, file_size, progress_callback=None
    ):
        """Determines the correct upload method and executes it.

        Args:
            drive_id: Target drive.
            folder_id: Target folder inside the drive.
            file_name: Name of the file in the folder. An existing file with
                the same name is replaced.
            stream: Binary file object positioned at the start of the content.
            file_size: Number of bytes to upload from stream.
            progress_callback: Called with the byte count of every part sent.

        Returns:
            The uploaded DriveItem.
        """
        if self.use_upload_session(file_size):
            logger.debug("upload session; name:%s;size:%d", file_name, file_size)
            return self.upload_large_file(
                drive_id, folder_id, file_name, stream, file_size, progress_callback
            )
        logger.debug("single request upload; name:%s;size:%d", file_name, file_size)
        return self.upload_small_file(
            drive_id, folder_id, file_name, stream, file_size, progress_callback
        )

    def upload_small_file(
        self, drive_id, folder_id, file_name, stream, file_size, progress_callback=None
    ):
        """Uploads a file below the threshold using a single PUT request."""
        file_data = self._read(stream, file_size)
        item = self.client.put_content(
            drive_id, folder_id, file_name, file_data, conflict_behavior="replace"
        )

        if progress_callback:
            progress_callback(len(file_data))
        self._count(uploaded_size=len(file_data))
        return item

    def upload_large_file(
        self, drive_id, folder_id, file_name, stream, file_size, progress_callback=None
    ):
        """Uploads a file through a resumable upload session, one chunk at a time.

        Chunks go out strictly in order. The server answers 202 for every
        chunk but the last, and the finalized item for the last one. A
        failed chunk cancels the session; nothing is retried.
        """
        try:
            upload_url = self.client.create_upload_session(
                drive_id, folder_id, file_name, conflict_behavior="replace"
            )
        except GraphApiError as e:
            raise SessionCreationError(
                f"Could not create an upload session for {file_name}: {e}"
            ) from e
        if not upload_url:
            raise SessionCreationError(
                f"The server returned no upload URL for {file_name}"
            )

        try:
            return self._send_chunks(upload_url, stream, file_size, progress_callback)
        except SharePointUploadError:
            self._cancel_session(upload_url)
            raise

    def _send_chunks(self, upload_url, stream, file_size, progress_callback):
        uploaded_bytes = 0
        item = None

        while uploaded_bytes < file_size:
            chunk_data = self._read(stream, min(self.chunk_size, file_size - uploaded_bytes))
            chunk_size_actual = len(chunk_data)

            range_start = uploaded_bytes
            range_end = uploaded_bytes + chunk_size_actual - 1

            if chunk_size_actual == 0:
                raise ChunkTransferError(
                    f"Source ended after {uploaded_bytes} of {file_size} bytes",
                    range_start=range_start,
                    bytes_uploaded=uploaded_bytes,
                )

            try:
                item = self.client.upload_chunk(
                    upload_url, range_start, range_end, file_size, chunk_data
                )
            except GraphApiError as e:
                raise ChunkTransferError(
                    f"Chunk bytes {range_start}-{range_end}/{file_size} failed: {e}",
                    range_start=range_start,
                    range_end=range_end,
                    bytes_uploaded=uploaded_bytes,
                ) from e

            uploaded_bytes += chunk_size_actual
            self._count(chunks_uploaded=1, uploaded_size=chunk_size_actual)

            if progress_callback:
                progress_callback(chunk_size_actual)

        if item is None:
            raise ChunkTransferError(
                "The upload session did not return the finished item",
                bytes_uploaded=uploaded_bytes,
            )
        return item

    @staticmethod
    def _read(stream, size):
        try:
            return stream.read(size)
        except OSError as e:
            raise LocalFileError(f"Could not read the source file: {e}") from e

    def _cancel_session(self, upload_url):
        try:
            self.client.cancel_upload_session(upload_url)
        except GraphApiError as e:
            # expired sessions are discarded server-side
            logger.warning("could not cancel upload session; error:%s", e)

    def _count(self, **kwargs):
        if self.stats is not None:
            self.stats.update(**kwargs)
