"""Folder resolution for SharePoint Uploader (spupload)."""

import logging

from spupload.core.exceptions import FolderCreationError, GraphApiError
from spupload.utils.helpers import split_folder_path

logger = logging.getLogger(__name__)

ROOT_ITEM_ID = "root"


class FolderResolver:
    """Walks a folder path inside a drive, creating the segments that are missing."""

    def __init__(self, client, reporter=None, stats=None):
        """Initialize with a GraphClient and optional reporter and stats."""
        self.client = client
        self.reporter = reporter
        self.stats = stats

    def ensure_folder(self, drive_id, folder_path):
        """Ensure folder_path exists in the drive and return the id of its last folder.

        An empty path (or one made only of slashes) resolves to the drive root.
        """
        chain = self.ensure_path(drive_id, split_folder_path(folder_path))
        return chain[-1].id if chain else ROOT_ITEM_ID

    def ensure_path(self, drive_id, segments):
        """Resolve each segment in order, starting at the drive root.

        Args:
            drive_id: Drive that holds the folders.
            segments: Folder names from the outermost to the innermost.

        Returns:
            One DriveItem per segment; the last one is the target folder.

        Raises:
            FolderCreationError: If a segment is missing and cannot be created.
        """
        chain = []
        parent_id = ROOT_ITEM_ID

        for name in segments:
            folder = self.client.get_child_by_name(drive_id, parent_id, name)
            if folder is not None:
                self._require_folder(folder, name)
                logger.debug("folder exists; name:%s;id:%s", name, folder.id)
                self._count(folders_found=1)
            else:
                folder = self._create(drive_id, parent_id, name)

            chain.append(folder)
            parent_id = folder.id

        return chain

    def _create(self, drive_id, parent_id, name):
        try:
            folder = self.client.create_child_folder(
                drive_id, parent_id, name, conflict_behavior="fail"
            )
        except GraphApiError as e:
            if not e.is_name_conflict:
                raise FolderCreationError(name, str(e)) from e

            # Somebody else created it between our lookup and our create.
            logger.debug("folder created concurrently; name:%s", name)
            folder = self.client.get_child_by_name(drive_id, parent_id, name)
            if folder is None:
                raise FolderCreationError(name, str(e)) from e
            self._require_folder(folder, name)
            self._count(folders_found=1)
            return folder

        if not folder.id:
            raise FolderCreationError(name, "the server returned no item id")

        self._count(folders_created=1)
        if self.reporter is not None:
            self.reporter.folder_created(name)
        return folder

    @staticmethod
    def _require_folder(item, name):
        if not item.is_folder:
            raise FolderCreationError(name, "a file with this name exists")

    def _count(self, **kwargs):
        if self.stats is not None:
            self.stats.update(**kwargs)
