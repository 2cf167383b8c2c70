"""SharePoint Uploader (spupload) - upload a file to a SharePoint Online document library."""

__version__ = "0.1.0"

from .core.client import GraphClient
from .core.auth import SharePointAuth
from .core.config import UploadConfig, load_config
from .core.stats import OperationStats
from .services.orchestrator import UploadOrchestrator
from .services.upload import SharePointUploader

__all__ = [
    "GraphClient",
    "SharePointAuth",
    "UploadConfig",
    "load_config",
    "OperationStats",
    "UploadOrchestrator",
    "SharePointUploader",
]
