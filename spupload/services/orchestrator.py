"""Upload pipeline for SharePoint Uploader (spupload)."""

import logging
import os

from spupload.core.config import CHUNK_SIZE
from spupload.core.exceptions import LocalFileError, SharePointUploadError
from spupload.core.stats import OperationStats
from spupload.models.file import UploadResult
from spupload.services.folder import FolderResolver
from spupload.services.site import DriveResolver, SiteResolver, parse_site_url
from spupload.services.upload import SharePointUploader
from spupload.utils.progress import UploadReporter

logger = logging.getLogger(__name__)


class UploadOrchestrator:
    """Runs one upload: site, library, folder, then the file itself."""

    def __init__(self, config, client, reporter=None, stats=None, chunk_size=CHUNK_SIZE):
        """Initialize the pipeline.

        Args:
            config: UploadConfig describing the destination.
            client: GraphClient (or any object with the same methods).
            reporter: UploadReporter receiving progress events.
            stats: OperationStats to record counters in.
            chunk_size: Chunk size for session uploads.
        """
        self.config = config
        self.client = client
        self.reporter = reporter or UploadReporter()
        self.stats = stats or OperationStats()
        self.site_resolver = SiteResolver(client)
        self.drive_resolver = DriveResolver(client)
        self.folder_resolver = FolderResolver(client, self.reporter, self.stats)
        self.uploader = SharePointUploader(client, chunk_size=chunk_size, stats=self.stats)

    def upload(self, file_path) -> UploadResult:
        """Upload file_path to the configured folder.

        The first failing stage ends the run. Folders created before the
        failure stay in place.

        Returns:
            UploadResult with succeeded=False and the error attached when
            any stage fails.
        """
        file_name = os.path.basename(file_path)
        file_size = 0
        try:
            file_size = self._local_file_size(file_path)
            item = self._run(file_path, file_name, file_size)
        except SharePointUploadError as e:
            logger.debug("upload aborted; file:%s;error:%r", file_name, e)
            self.reporter.upload_failed(e)
            return UploadResult(file_name, file_size, succeeded=False, error=e)

        result = UploadResult(file_name, file_size, succeeded=True, item=item)
        self.reporter.upload_succeeded(result)
        return result

    def _run(self, file_path, file_name, file_size):
        self.reporter.upload_started(
            file_name, f"{self.config.site_url.rstrip('/')}/{self.config.folder_path.strip('/')}"
        )
        site_ref = parse_site_url(self.config.site_url)

        site = self.site_resolver.resolve(site_ref, self.config.site_url)
        self.reporter.site_resolved(site)

        drive = self.drive_resolver.resolve(site.id, self.config.library_name)
        self.reporter.drive_resolved(drive)

        folder_id = self.folder_resolver.ensure_folder(drive.id, self.config.folder_path)

        try:
            stream = open(file_path, "rb")
        except OSError as e:
            raise LocalFileError(f"Could not read {file_path}: {e}") from e

        with stream:
            with self.reporter.transfer(file_name, file_size) as progress_callback:
                return self.uploader.upload(
                    drive.id, folder_id, file_name, stream, file_size, progress_callback
                )

    @staticmethod
    def _local_file_size(file_path):
        if not os.path.isfile(file_path):
            raise LocalFileError(f"File not found: {file_path}")
        try:
            return os.path.getsize(file_path)
        except OSError as e:
            raise LocalFileError(f"Could not read {file_path}: {e}") from e
