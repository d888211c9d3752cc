"""OAuth credentials shared by the Google API clients."""

import logging
from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent.parent / "config"


def get_credentials(scopes: list[str], token_name: str, service_name: str) -> Credentials:
    """Load a cached token for the given scopes, refreshing or re-authorizing it."""
    token_path = CONFIG_DIR / token_name
    credentials_path = CONFIG_DIR / "credentials.json"

    creds = None
    if token_path.exists():
        creds = Credentials.from_authorized_user_file(str(token_path), scopes)

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        logger.info(f"Refreshing expired {service_name} credentials")
        creds.refresh(Request())
    else:
        if not credentials_path.exists():
            raise FileNotFoundError(
                f"Credentials file not found: {credentials_path}. "
                "Download credentials.json from Google Cloud Console."
            )
        logger.info(f"Starting OAuth flow for {service_name}")
        flow = InstalledAppFlow.from_client_secrets_file(str(credentials_path), scopes)
        creds = flow.run_local_server(port=0)

    token_path.write_text(creds.to_json())
    logger.info(f"Saved {service_name} credentials to {token_path}")
    return creds
