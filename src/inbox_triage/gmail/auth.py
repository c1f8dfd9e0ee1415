"""
Google authentication module.

Loads the authorized-user token produced by an external OAuth flow and
builds the Gmail and Calendar API services from it. Token acquisition
itself is handled outside this project.
"""

import json
import logging
from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build, Resource

logger = logging.getLogger(__name__)

# Scopes required for triage
SCOPES = [
    "https://www.googleapis.com/auth/gmail.modify",
    "https://www.googleapis.com/auth/gmail.send",
    "https://www.googleapis.com/auth/calendar.events",
    "https://www.googleapis.com/auth/calendar.readonly",
]


def load_credentials(token_path: str | Path) -> Credentials:
    """
    Load Google OAuth2 credentials from a token JSON file.

    Args:
        token_path: Path to the authorized-user token JSON.

    Returns:
        Credentials, refreshed if they had expired.

    Raises:
        FileNotFoundError: If the token file does not exist.
    """
    token_path = Path(token_path)
    if not token_path.exists():
        raise FileNotFoundError(
            f"Token file not found at {token_path}. "
            "Generate an authorized-user token.json and set GMAIL_TOKEN_PATH."
        )

    token_data = json.loads(token_path.read_text())
    creds = Credentials.from_authorized_user_info(token_data, SCOPES)

    # Refresh if expired
    if creds.expired and creds.refresh_token:
        logger.info("Refreshing expired Google credentials")
        creds.refresh(Request())

    return creds


def build_gmail_service(creds: Credentials) -> Resource:
    """Build an authenticated Gmail API service."""
    return build("gmail", "v1", credentials=creds, cache_discovery=False)


def build_calendar_service(creds: Credentials) -> Resource:
    """Build an authenticated Calendar API service."""
    return build("calendar", "v3", credentials=creds, cache_discovery=False)
