from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Union


TAB_NAME = "RawLog"
HEADER = [
    "Date",
    "Time",
    "Client",
    "Sub Client",
    "Host Machine",
    "Project",
    "Ticket",
    "Minutes Spent",
    "Log Entry",
]

STOP = "stop"

_INT_RE = re.compile(r"^\d+$")


def _as_minutes(value: Any) -> int | None:
    """Return value as a non-negative int, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if value is None:
        return None
    s = str(value).strip()
    return int(s) if _INT_RE.match(s) else None


@dataclass(frozen=True)
class Explicit:
    """Minutes given literally on the command line."""

    raw: str

    @property
    def value(self) -> int | None:
        return _as_minutes(self.raw)


@dataclass(frozen=True)
class Unspecified:
    """Compute minutes from the time since the previous row."""


@dataclass(frozen=True)
class ContinuePrevious:
    """Carry the previous row's context forward and compute minutes."""


MinutesSpec = Union[Explicit, Unspecified, ContinuePrevious]


def parse_minutes(raw: Any) -> MinutesSpec:
    if isinstance(raw, (Explicit, Unspecified, ContinuePrevious)):
        return raw
    if raw is None:
        return Unspecified()
    s = str(raw).strip()
    if s in ("", "?"):
        return Unspecified()
    if s == "c":
        return ContinuePrevious()
    return Explicit(s)


@dataclass(frozen=True)
class LogRow:
    date: str
    time: str
    client: str = ""
    sub_client: str = ""
    host_machine: str = ""
    project: str = ""
    ticket: str = ""
    minutes_spent: int | None = None
    log_entry: str = ""

    def to_values(self) -> list[Any]:
        minutes: Any = "" if self.minutes_spent is None else self.minutes_spent
        return [
            self.date,
            self.time,
            self.client,
            self.sub_client,
            self.host_machine,
            self.project,
            self.ticket,
            minutes,
            self.log_entry,
        ]

    @classmethod
    def from_values(cls, values: list[Any]) -> "LogRow":
        # Sheets drops trailing empty cells from each row.
        cells = ["" if v is None else str(v) for v in values[: len(HEADER)]]
        cells += [""] * (len(HEADER) - len(cells))
        return cls(
            date=cells[0],
            time=cells[1],
            client=cells[2],
            sub_client=cells[3],
            host_machine=cells[4],
            project=cells[5],
            ticket=cells[6],
            minutes_spent=_as_minutes(cells[7]),
            log_entry=cells[8],
        )


CONTEXT_FIELDS = ("client", "sub_client", "host_machine", "project", "ticket")


@dataclass
class SessionInput:
    """One invocation's description of a work session.

    A context field left as None is taken from the previous row; an explicit
    string (even "") is used as given.
    """

    log_entry: str = ""
    minutes_spent: Any = ""
    client: str | None = None
    sub_client: str | None = None
    host_machine: str | None = None
    project: str | None = None
    ticket: str | None = None

    @property
    def minutes(self) -> MinutesSpec:
        return parse_minutes(self.minutes_spent)

    def context(self) -> dict[str, str | None]:
        return {name: getattr(self, name) for name in CONTEXT_FIELDS}


def context_of(row: LogRow) -> dict[str, str]:
    return {f.name: getattr(row, f.name) for f in fields(row) if f.name in CONTEXT_FIELDS}
