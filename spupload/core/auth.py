"""Authentication module for SharePoint Uploader (spupload)."""

import logging

import msal
import requests

from spupload.core.config import AUTHORITY_BASE_URL, SCOPES
from spupload.core.exceptions import AuthError

logger = logging.getLogger(__name__)


class SharePointAuth:
    """Handles app-only authentication against Azure AD for Microsoft Graph."""

    def __init__(self, client_id, client_secret, tenant_id):
        """Initialize authentication with credentials."""
        if not all([client_id, client_secret, tenant_id]):
            raise AuthError("Missing required authentication credentials.")

        self.client_id = client_id
        self.tenant_id = tenant_id
        self.authority = f"{AUTHORITY_BASE_URL}/{tenant_id}"
        try:
            self._app = msal.ConfidentialClientApplication(
                client_id=client_id,
                authority=self.authority,
                client_credential=client_secret,
            )
        except (ValueError, requests.exceptions.RequestException) as e:
            # msal validates the authority against the tenant on construction
            raise AuthError(f"Invalid Azure AD authority {self.authority}: {e}") from e

    def get_access_token(self):
        """
        Acquires an app-only access token using the client credentials flow.
        msal keeps the token in its in-memory cache and only goes back to
        Azure AD once it is about to expire.
        """
        try:
            result = self._app.acquire_token_for_client(scopes=SCOPES) or {}
        except requests.exceptions.RequestException as e:
            raise AuthError(f"Could not reach {self.authority}: {e}") from e

        if "access_token" in result:
            return result["access_token"]

        error = result.get("error", "unknown_error")
        description = result.get("error_description", "No description provided")
        logger.debug("token acquisition failed; error:%s", error)
        raise AuthError(
            f"Failed to acquire access token: {error}. {description} "
            "Check the credentials and make sure admin consent has been granted "
            "for the application permissions.",
            error=error,
            error_description=description,
        )

    def get_headers(self):
        """Constructs the default headers for API requests."""
        token = self.get_access_token()
        return {"Authorization": f"Bearer {token}"}
