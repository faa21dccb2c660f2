"""Cell values and typed access to them."""

from __future__ import annotations

import enum
import math
import operator
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from typing import Any

from sheetcells.dates import time_from_excel_time, time_to_excel_time

GENERAL_FORMAT = "general"
DEFAULT_DATE_FORMAT = "mm-dd-yy"
DEFAULT_DATE_TIME_FORMAT = "m/d/yy h:mm"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_RE = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)
_HEX_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_INT_RE = re.compile(r"[+-]?[0-9]+")


class CellType(enum.IntEnum):
    """Storage type of a cell's value."""

    STRING = 0
    # Formula returning a string; numeric and boolean formulas use those types.
    STRING_FORMULA = 1
    NUMERIC = 2
    BOOL = 3
    INLINE = 4
    ERROR = 5
    DATE = 6


def _parse_float(text: str) -> float:
    """Parse a number strictly: no surrounding whitespace, no underscores."""
    if _DECIMAL_RE.fullmatch(text):
        value = float(text)
        if math.isinf(value):
            raise ValueError(f"number out of range: {text!r}")
        return value
    if _SPECIAL_RE.fullmatch(text):
        return float(text)
    if _HEX_RE.fullmatch(text):
        try:
            return float.fromhex(text)
        except OverflowError as exc:
            raise ValueError(f"number out of range: {text!r}") from exc
    raise ValueError(f"invalid number syntax: {text!r}")


def _parse_int64(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer syntax: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _format_float(value: float) -> str:
    """Shortest round-tripping decimal form, never in scientific notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def cell_type_fallback(
    cell_type: CellType | None, cell_data: str, fallback: CellType
) -> CellType:
    """Keep a numeric type only if the data parses as a number."""
    if cell_type is not None and cell_type == CellType.NUMERIC:
        try:
            _parse_float(cell_data)
        except ValueError:
            return fallback
        return cell_type
    return fallback


@dataclass
class Hyperlink:
    display_string: str = ""
    link: str = ""
    tooltip: str = ""


@dataclass(frozen=True)
class DateTimeOptions:
    """Time zone and display format used when storing a datetime."""

    location: tzinfo = timezone.utc
    excel_time_format: str = DEFAULT_DATE_FORMAT


DEFAULT_DATE_OPTIONS = DateTimeOptions(timezone.utc, DEFAULT_DATE_FORMAT)
DEFAULT_DATE_TIME_OPTIONS = DateTimeOptions(timezone.utc, DEFAULT_DATE_TIME_FORMAT)


@dataclass
class Cell:
    """A single cell: its raw value, type, format and metadata."""

    value: str = ""
    cell_type: CellType = CellType.STRING
    num_fmt: str = ""
    formula: str = ""
    row: Any = field(default=None, repr=False, compare=False)
    style: Any = None
    date1904: bool = False
    hidden: bool = False
    h_merge: int = 0
    v_merge: int = 0
    data_validation: Any = None
    hyperlink: Hyperlink = field(default_factory=Hyperlink)

    def merge(self, hcells: int, vcells: int) -> None:
        """Merge with neighbouring cells horizontally and/or vertically."""
        self.h_merge = hcells
        self.v_merge = vcells

    def set_string(self, s: str) -> None:
        self.value = s
        self.formula = ""
        self.cell_type = CellType.STRING

    def set_float(self, n: float) -> None:
        self.set_value(float(n))

    def set_float_with_format(self, n: float, fmt: str) -> None:
        self.set_value(float(n))
        self.num_fmt = fmt
        self.formula = ""

    def set_format(self, fmt: str) -> None:
        self.num_fmt = fmt

    def set_date(self, t: datetime) -> None:
        self.set_date_with_options(t, DEFAULT_DATE_OPTIONS)

    def set_date_time(self, t: datetime) -> None:
        self.set_date_with_options(t, DEFAULT_DATE_TIME_OPTIONS)

    def set_date_with_options(self, t: datetime, options: DateTimeOptions) -> None:
        """Store the wall-clock time of ``t`` in ``options.location``, to the second."""
        if t.tzinfo is None:
            t = t.replace(tzinfo=timezone.utc)
        wall = t.astimezone(options.location).replace(tzinfo=timezone.utc, microsecond=0)
        self.set_date_time_with_format(
            time_to_excel_time(wall, self.date1904), options.excel_time_format
        )

    def set_date_time_with_format(self, n: float, fmt: str) -> None:
        self.value = _format_float(float(n))
        self.num_fmt = fmt
        self.formula = ""
        self.cell_type = CellType.NUMERIC

    def as_float(self) -> float:
        """Return the value as a float; raise ValueError if it is not a number."""
        return _parse_float(self.value)

    def as_int(self) -> int:
        """Return the value parsed as a number and truncated toward zero."""
        return int(_parse_float(self.value))

    def parse_int(self) -> int:
        """Return the value parsed as a 64-bit decimal integer."""
        return _parse_int64(self.value)

    def get_time(self, date1904: bool) -> datetime:
        return time_from_excel_time(self.as_float(), date1904)

    def set_int(self, n: int) -> None:
        self.set_numeric(str(operator.index(n)))

    def set_value(self, value: Any) -> None:
        """Store a value, choosing the cell type from the Python type."""
        if isinstance(value, datetime):
            self.set_date_time(value)
        elif isinstance(value, bool):
            self.set_string("true" if value else "false")
        elif isinstance(value, int):
            self.set_numeric(str(value))
        elif isinstance(value, float):
            self.set_numeric(_format_float(value))
        elif isinstance(value, str):
            self.set_string(value)
        elif isinstance(value, (bytes, bytearray)):
            self.set_string(bytes(value).decode("utf-8", errors="replace"))
        elif value is None:
            self.set_string("")
        else:
            self.set_string(str(value))

    def set_numeric(self, s: str) -> None:
        self.value = s
        self.num_fmt = GENERAL_FORMAT
        self.formula = ""
        self.cell_type = CellType.NUMERIC

    def set_bool(self, b: bool) -> None:
        self.value = "1" if b else "0"
        self.cell_type = CellType.BOOL

    def as_bool(self) -> bool:
        """Interpret the value as a boolean according to the cell type."""
        if self.cell_type == CellType.BOOL:
            return self.value == "1"
        if self.cell_type == CellType.NUMERIC:
            return self.value != "0"
        return self.value != ""

    def set_formula(self, formula: str) -> None:
        self.formula = formula
        self.cell_type = CellType.NUMERIC

    def set_string_formula(self, formula: str) -> None:
        self.formula = formula
        self.cell_type = CellType.STRING_FORMULA

    def set_style(self, style: Any) -> None:
        self.style = style

    def set_data_validation(self, validation: Any) -> None:
        self.data_validation = validation