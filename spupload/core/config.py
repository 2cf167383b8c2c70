"""Configuration for SharePoint Uploader (spupload)."""

import json
import os
from dataclasses import dataclass

from spupload.core.exceptions import ConfigurationError

# Microsoft Graph API constants
GRAPH_API_ENDPOINT = "https://graph.microsoft.com/v1.0"
GRAPH_HOST = "graph.microsoft.com"
AUTHORITY_BASE_URL = "https://login.microsoftonline.com"
SCOPES = ["https://graph.microsoft.com/.default"]  # Scope for confidential client flow
REQUEST_TIMEOUT = 60  # seconds

# File size constants
SMALL_FILE_THRESHOLD = 4 * 1024 * 1024  # 4 MiB
CHUNK_SIZE_UNIT = 320 * 1024  # upload session chunks must be multiples of 320 KiB
CHUNK_SIZE = 10 * CHUNK_SIZE_UNIT  # 3,276,800 bytes

# Library that falls back to the site's default drive when no drive matches by name
DEFAULT_LIBRARY_NAME = "Documents"

# Config file
CONFIG_SECTION = "SharePoint"
DEFAULT_CONFIG_FILE = "config.json"
ENV_CONFIG_PATH = "SPUPLOAD_CONFIG"

# JSON key -> UploadConfig attribute
CONFIG_FIELDS = {
    "SiteUrl": "site_url",
    "LibraryName": "library_name",
    "FolderPath": "folder_path",
    "TenantId": "tenant_id",
    "ClientId": "client_id",
    "ClientSecret": "client_secret",
}


@dataclass(frozen=True)
class UploadConfig:
    """Connection settings for one upload run.

    Every field is required. A config file missing any of them is rejected
    by load_config() before a single request is sent.
    """

    site_url: str
    library_name: str
    folder_path: str
    tenant_id: str
    client_id: str
    client_secret: str


def default_config_path():
    """Return the config path from the environment, or config.json in the working directory."""
    return os.getenv(ENV_CONFIG_PATH) or os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)


def load_config(config_path=None) -> UploadConfig:
    """Load and validate the JSON config file.

    The file must hold an object with a "SharePoint" section containing
    SiteUrl, LibraryName, FolderPath, TenantId, ClientId and ClientSecret.

    Args:
        config_path: Path to the JSON file. Defaults to default_config_path().

    Returns:
        Validated UploadConfig instance.

    Raises:
        ConfigurationError: If the file is missing or unreadable, is not
            valid JSON, or any required field is absent or blank.
    """
    config_path = config_path or default_config_path()

    if not os.path.isfile(config_path):
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file is not valid JSON: {config_path} ({e})") from e
    except OSError as e:
        raise ConfigurationError(f"Could not read config file {config_path}: {e}") from e

    section = data.get(CONFIG_SECTION) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"Config file {config_path} has no '{CONFIG_SECTION}' section"
        )

    values = {}
    for key, attribute in CONFIG_FIELDS.items():
        value = section.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(f"Missing required configuration field: {key}")
        values[attribute] = value.strip()

    return UploadConfig(**values)
