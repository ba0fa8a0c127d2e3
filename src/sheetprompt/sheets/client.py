"""Google Sheets API backend."""

import logging
from typing import Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import settings
from ..errors import SheetNotFoundError, SpreadsheetError
from .backend import SpreadsheetBackend, cell_to_str
from .ranges import col_letter_to_index, index_to_col_letter

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def _quote_sheet(sheet: str) -> str:
    return "'" + sheet.replace("'", "''") + "'"


class GoogleSheetsBackend(SpreadsheetBackend):
    """Spreadsheet backend for one Google Sheets document."""

    def __init__(self, spreadsheet_id: Optional[str] = None, service=None):
        self.spreadsheet_id = spreadsheet_id or settings.spreadsheet_id
        self._service = service
        self._credentials = None

    def _get_credentials(self) -> Credentials:
        """Get or refresh OAuth2 credentials."""
        creds = None

        if settings.google_token_path.exists():
            creds = Credentials.from_authorized_user_file(str(settings.google_token_path), SCOPES)

        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                if not settings.google_credentials_path.exists():
                    raise FileNotFoundError(
                        f"Google credentials file not found at {settings.google_credentials_path}. "
                        "Please download it from Google Cloud Console."
                    )
                flow = InstalledAppFlow.from_client_secrets_file(
                    str(settings.google_credentials_path), SCOPES
                )
                creds = flow.run_local_server(port=0)

            # Save credentials for next run
            settings.google_token_path.parent.mkdir(parents=True, exist_ok=True)
            with open(settings.google_token_path, "w") as token:
                token.write(creds.to_json())

        return creds

    @property
    def service(self):
        """Get or create the Sheets API service."""
        if self._service is None:
            self._credentials = self._get_credentials()
            self._service = build("sheets", "v4", credentials=self._credentials)
        return self._service

    def _require_spreadsheet(self) -> str:
        if not self.spreadsheet_id:
            raise SpreadsheetError("No spreadsheet configured. Set SPREADSHEET_ID.")
        return self.spreadsheet_id

    def _get_values(self, range_notation: str) -> list[list]:
        try:
            result = (
                self.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self._require_spreadsheet(),
                    range=range_notation,
                    majorDimension="ROWS",
                )
                .execute()
            )
        except HttpError as e:
            raise SpreadsheetError(f"Failed to read {range_notation}: {e}")
        return result.get("values", [])

    def _require_sheet(self, sheet: str):
        if not self.has_sheet(sheet):
            raise SheetNotFoundError(sheet)

    def get_sheet_names(self) -> list[str]:
        try:
            result = (
                self.service.spreadsheets()
                .get(spreadsheetId=self._require_spreadsheet(), fields="sheets.properties.title")
                .execute()
            )
        except HttpError as e:
            raise SpreadsheetError(f"Failed to get spreadsheet info: {e}")
        return [sheet["properties"]["title"] for sheet in result.get("sheets", [])]

    def get_last_row(self, sheet: str) -> int:
        self._require_sheet(sheet)
        rows = self._get_values(_quote_sheet(sheet))
        # Trailing rows the API returns are non-empty, but interior ones may be []
        for index in range(len(rows), 0, -1):
            if any(cell not in (None, "") for cell in rows[index - 1]):
                return index
        return 0

    def get_last_column(self, sheet: str) -> int:
        self._require_sheet(sheet)
        rows = self._get_values(_quote_sheet(sheet))
        last = 0
        for row in rows:
            for index in range(len(row), 0, -1):
                if row[index - 1] not in (None, ""):
                    last = max(last, index)
                    break
        return last

    def read_column(self, sheet: str, column: str, start_row: int, row_count: int) -> list[str]:
        if row_count <= 0:
            return []
        self._require_sheet(sheet)
        column = column.upper()
        col_letter_to_index(column)
        end_row = start_row + row_count - 1
        rows = self._get_values(f"{_quote_sheet(sheet)}!{column}{start_row}:{column}{end_row}")
        values = [cell_to_str(row[0]) if row else "" for row in rows]
        # The API drops trailing empty rows
        values.extend([""] * (row_count - len(values)))
        return values

    def read_row(self, sheet: str, row: int, column_count: int) -> list[str]:
        if column_count <= 0:
            return []
        self._require_sheet(sheet)
        last_col = index_to_col_letter(column_count - 1)
        rows = self._get_values(f"{_quote_sheet(sheet)}!A{row}:{last_col}{row}")
        values = [cell_to_str(v) for v in (rows[0] if rows else [])]
        values.extend([""] * (column_count - len(values)))
        return values

    def write_column(self, sheet: str, column: str, start_row: int, values: list[str]) -> int:
        if not values:
            return 0
        self._require_sheet(sheet)
        column = column.upper()
        col_letter_to_index(column)
        end_row = start_row + len(values) - 1
        range_notation = f"{_quote_sheet(sheet)}!{column}{start_row}:{column}{end_row}"

        try:
            result = (
                self.service.spreadsheets()
                .values()
                .update(
                    spreadsheetId=self._require_spreadsheet(),
                    range=range_notation,
                    valueInputOption="RAW",
                    body={"values": [[value] for value in values]},
                )
                .execute()
            )
        except HttpError as e:
            raise SpreadsheetError(f"Failed to write {range_notation}: {e}")

        updated = result.get("updatedRows", len(values))
        logger.info(f"Wrote {updated} rows to {range_notation}")
        return updated
