"""Exception hierarchy for SharePoint Uploader (spupload).

Every failure the upload pipeline can report derives from
SharePointUploadError, so callers can catch the whole family with one
except clause and still tell the stages apart.
"""

# Graph error codes returned when a child with the same name already exists
NAME_CONFLICT_CODES = ("nameAlreadyExists", "resourceAlreadyExists")


class SharePointUploadError(Exception):
    """Base exception for upload failures."""

    summary = "Upload failed"


class ConfigurationError(SharePointUploadError):
    """Raised for a missing or invalid config field or a malformed site URL."""

    summary = "Invalid configuration"


class AuthError(SharePointUploadError):
    """Raised when an access token cannot be acquired."""

    summary = "Authentication failed"

    def __init__(self, message, error=None, error_description=None):
        super().__init__(message)
        self.error = error
        self.error_description = error_description


class GraphApiError(SharePointUploadError):
    """Raised when Microsoft Graph returns a non-2xx response or cannot be reached."""

    summary = "Microsoft Graph request failed"

    def __init__(self, status_code, code, message):
        label = status_code if status_code is not None else "n/a"
        super().__init__(f"Graph API error {label} ({code}): {message}")
        self.status_code = status_code
        self.code = code
        self.message = message

    @property
    def is_not_found(self):
        return self.status_code == 404

    @property
    def is_name_conflict(self):
        """True when the request failed because the item name is already taken."""
        return self.code in NAME_CONFLICT_CODES or self.status_code == 409


class SiteNotFoundError(SharePointUploadError):
    """Raised when neither site lookup form resolves the configured site URL."""

    summary = "SharePoint site not found"

    def __init__(self, site_url):
        super().__init__(f"SharePoint site not found: {site_url}")
        self.site_url = site_url


class LibraryNotFoundError(SharePointUploadError):
    """Raised when no drive on the site matches the configured library name."""

    summary = "Document library not found"

    def __init__(self, library_name):
        super().__init__(f"Document library not found: {library_name}")
        self.library_name = library_name


class FolderCreationError(SharePointUploadError):
    """Raised when a folder segment can be neither found nor created."""

    summary = "Folder creation failed"

    def __init__(self, folder_name, message):
        super().__init__(f"Could not create folder '{folder_name}': {message}")
        self.folder_name = folder_name


class SessionCreationError(SharePointUploadError):
    """Raised when the server does not hand out an upload session URL."""

    summary = "Upload session could not be created"


class ChunkTransferError(SharePointUploadError):
    """Raised when a chunk of a session upload fails."""

    summary = "Chunk transfer failed"

    def __init__(self, message, range_start=None, range_end=None, bytes_uploaded=0):
        super().__init__(message)
        self.range_start = range_start
        self.range_end = range_end
        self.bytes_uploaded = bytes_uploaded


class LocalFileError(SharePointUploadError):
    """Raised when the source file is missing or unreadable."""

    summary = "Local file error"
