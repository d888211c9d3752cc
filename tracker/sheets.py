"""Google Sheets sync for the canonical calendar events."""

import logging

from googleapiclient.discovery import build

from .config import get_config
from .google_auth import get_credentials
from .models import CalendarEvent

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

HEADERS = [
    "Date",
    "Kind",
    "Title",
    "Role",
    "Time",
    "Location",
    "Employment Type",
]


def get_service():
    return build("sheets", "v4", credentials=get_credentials(SCOPES, "sheets_token.json", "Sheets"))


def sync_events(events: list[CalendarEvent], service=None) -> int:
    """Replace the sheet contents with the given events.

    The event set is derived from scratch on every load, so the sheet is
    rewritten rather than appended to.
    """
    config = get_config()
    if not config.spreadsheet_id:
        raise ValueError("spreadsheet_id is not configured")

    if service is None:
        service = get_service()

    values = service.spreadsheets().values()
    data_range = f"{config.sheet_name}!A:G"

    values.clear(spreadsheetId=config.spreadsheet_id, range=data_range, body={}).execute()

    rows = [HEADERS] + [event.to_row() for event in events]
    values.update(
        spreadsheetId=config.spreadsheet_id,
        range=f"{config.sheet_name}!A1",
        valueInputOption="RAW",
        body={"values": rows},
    ).execute()

    logger.info(f"Synced {len(events)} events to spreadsheet")
    return len(events)
