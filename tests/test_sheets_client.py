from unittest.mock import MagicMock

from devlog_sheets.models import HEADER
from devlog_sheets.sheets_client import a1_range, append_row, ensure_tab_exists, get_last_row


def _service(tabs_sequence=None, values=None) -> MagicMock:
    service = MagicMock()
    spreadsheets = service.spreadsheets.return_value
    if tabs_sequence is not None:
        spreadsheets.get.return_value.execute.side_effect = [
            {"sheets": [{"properties": {"title": t}} for t in tabs]} for tabs in tabs_sequence
        ]
    if values is not None:
        spreadsheets.values.return_value.get.return_value.execute.return_value = values
    return service


def test_append_row_uses_insert_rows():
    service = _service()
    append_row(service, spreadsheet_id="SHEET", tab_name="RawLog", values=["a", "b"])
    service.spreadsheets.return_value.values.return_value.append.assert_called_once_with(
        spreadsheetId="SHEET",
        range="'RawLog'!A1",
        valueInputOption="RAW",
        insertDataOption="INSERT_ROWS",
        body={"values": [["a", "b"]]},
    )


def test_ensure_tab_exists_creates_tab_and_header():
    service = _service(tabs_sequence=[["Sheet1"]])
    assert ensure_tab_exists(service, spreadsheet_id="SHEET", tab_name="RawLog") is True

    spreadsheets = service.spreadsheets.return_value
    spreadsheets.batchUpdate.assert_called_once_with(
        spreadsheetId="SHEET",
        body={"requests": [{"addSheet": {"properties": {"title": "RawLog"}}}]},
    )
    append_kwargs = spreadsheets.values.return_value.append.call_args.kwargs
    assert append_kwargs["body"] == {"values": [HEADER]}


def test_ensure_tab_exists_twice_writes_header_once():
    service = _service(tabs_sequence=[[], ["RawLog"]])
    assert ensure_tab_exists(service, spreadsheet_id="SHEET", tab_name="RawLog") is True
    assert ensure_tab_exists(service, spreadsheet_id="SHEET", tab_name="RawLog") is False

    spreadsheets = service.spreadsheets.return_value
    assert spreadsheets.batchUpdate.call_count == 1
    assert spreadsheets.values.return_value.append.call_count == 1


def test_get_last_row_none_when_empty_or_header_only():
    assert get_last_row(_service(values={}), spreadsheet_id="S", tab_name="RawLog") is None
    assert get_last_row(_service(values={"values": [HEADER]}), spreadsheet_id="S", tab_name="RawLog") is None


def test_get_last_row_returns_last():
    service = _service(
        values={
            "values": [
                HEADER,
                ["Mon, Jan 1, 2024", "08:00", "Acme", "X", "laptop", "site", "T-1", "5", "first"],
                ["Mon, Jan 1, 2024", "09:00", "Acme", "X", "laptop", "site", "T-1", "60", "second"],
            ]
        }
    )
    row = get_last_row(service, spreadsheet_id="S", tab_name="RawLog")
    assert row.time == "09:00"
    assert row.minutes_spent == 60
    assert row.log_entry == "second"
    service.spreadsheets.return_value.values.return_value.get.assert_called_once_with(
        spreadsheetId="S", range="'RawLog'!A1:I"
    )


def test_a1_range_quotes_tab_names():
    assert a1_range("RawLog", "A1") == "'RawLog'!A1"
    assert a1_range("Dev Log", "A1:I") == "'Dev Log'!A1:I"
    assert a1_range("Mark's Log", "A1") == "'Mark''s Log'!A1"


def test_append_row_to_tab_with_space():
    service = _service()
    append_row(service, spreadsheet_id="SHEET", tab_name="Dev Log", values=["a"])
    append_kwargs = service.spreadsheets.return_value.values.return_value.append.call_args.kwargs
    assert append_kwargs["range"] == "'Dev Log'!A1"
