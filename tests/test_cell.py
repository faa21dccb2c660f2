import math
from datetime import datetime, timedelta, timezone

import pytest

from sheetcells.cell import (
    DEFAULT_DATE_FORMAT,
    DEFAULT_DATE_TIME_FORMAT,
    GENERAL_FORMAT,
    Cell,
    CellType,
    DateTimeOptions,
    cell_type_fallback,
)
from sheetcells.dates import time_to_excel_time

UTC = timezone.utc


def test_set_float_with_format():
    cell = Cell()
    cell.set_float_with_format(37947.75334343, "yyyy/mm/dd")
    assert cell.value == "37947.75334343"
    assert cell.num_fmt == "yyyy/mm/dd"
    assert cell.cell_type == CellType.NUMERIC


@pytest.mark.parametrize(
    "number, expected",
    [(0, "0"), (0.000005, "0.000005"), (100.0, "100"), (37947.75334343, "37947.75334343")],
)
def test_set_float(number, expected):
    cell = Cell()
    cell.set_float(number)
    assert cell.value == expected


def test_set_float_large_value_is_not_scientific():
    cell = Cell()
    cell.set_float(1e21)
    assert cell.value == "1000000000000000000000"


def test_get_time():
    cell = Cell()
    cell.set_float(0)
    assert cell.get_time(False) == datetime(1899, 12, 30, tzinfo=UTC)
    cell.set_float(39813.0)
    assert cell.get_time(True) == datetime(2013, 1, 1, tzinfo=UTC)
    cell.value = "d"
    with pytest.raises(ValueError):
        cell.get_time(False)


def test_setters_and_getters():
    cell = Cell()
    cell.set_string("hello world")
    assert cell.value == "hello world"
    assert cell.cell_type == CellType.STRING

    cell.set_int(1024)
    assert cell.as_int() == 1024
    assert cell.num_fmt == GENERAL_FORMAT
    assert cell.cell_type == CellType.NUMERIC

    cell.set_int(1024)
    assert cell.parse_int() == 1024

    cell.set_float(1.024)
    assert cell.as_float() == 1.024
    assert cell.as_int() == 1
    assert cell.num_fmt == GENERAL_FORMAT
    assert cell.cell_type == CellType.NUMERIC

    cell.set_formula("10+20")
    assert cell.formula == "10+20"
    assert cell.cell_type == CellType.NUMERIC

    cell.set_string_formula("A1")
    assert cell.formula == "A1"
    assert cell.cell_type == CellType.STRING_FORMULA


def test_set_string_clears_formula():
    cell = Cell()
    cell.set_formula("1+1")
    cell.set_string("x")
    assert cell.formula == ""
    assert cell.cell_type == CellType.STRING


def test_as_int_truncates_toward_zero():
    assert Cell(value="-2.7").as_int() == -2


@pytest.mark.parametrize("text", ["1.5", "abc", "99999999999999999999", " 1", ""])
def test_parse_int_rejects(text):
    with pytest.raises(ValueError):
        Cell(value=text).parse_int()


@pytest.mark.parametrize("text", ["Fudge Cake", " 1", "1_000", "1e400", ""])
def test_as_float_rejects(text):
    with pytest.raises(ValueError):
        Cell(value=text).as_float()


@pytest.mark.parametrize(
    "text, expected", [("1e3", 1000.0), ("0x1p3", 8.0), (".5", 0.5), ("+2.", 2.0)]
)
def test_as_float_accepts(text, expected):
    assert Cell(value=text).as_float() == expected


def test_as_float_infinity():
    assert Cell(value="-Inf").as_float() == float("-inf")


def test_bool():
    cell = Cell()
    cell.set_bool(True)
    assert cell.value == "1"
    assert cell.as_bool() is True
    cell.set_bool(False)
    assert cell.value == "0"
    assert cell.as_bool() is False


def test_string_bool():
    cell = Cell()
    cell.set_int(0)
    assert cell.as_bool() is False
    cell.set_int(1)
    assert cell.as_bool() is True
    cell.set_string("")
    assert cell.as_bool() is False
    cell.set_string("0")
    assert cell.as_bool() is True


def test_set_value_int():
    cell = Cell()
    cell.set_value(1)
    assert cell.parse_int() == 1
    assert cell.cell_type == CellType.NUMERIC


def test_set_value_float():
    cell = Cell()
    cell.set_value(1.11)
    assert cell.as_float() == 1.11
    cell.set_value(0.000001)
    assert cell.value == "0.000001"
    assert cell.as_float() == 0.000001


def test_set_value_datetime():
    cell = Cell()
    cell.set_value(datetime(1970, 1, 1, tzinfo=UTC))
    assert math.floor(cell.as_float()) == 25569
    assert cell.num_fmt == DEFAULT_DATE_TIME_FORMAT


@pytest.mark.parametrize("value", [None, "", b""])
def test_set_value_empty(value):
    cell = Cell(value="something")
    cell.set_value(value)
    assert cell.value == ""
    assert cell.cell_type == CellType.STRING


def test_set_value_other_types():
    cell = Cell()
    cell.set_value(["test"])
    assert cell.value == "['test']"
    cell.set_value(True)
    assert cell.value == "true"
    assert cell.cell_type == CellType.STRING


def test_set_date():
    cell = Cell()
    cell.set_date(datetime(1970, 1, 1, tzinfo=UTC))
    assert math.floor(cell.as_float()) == 25569
    assert cell.num_fmt == DEFAULT_DATE_FORMAT


def test_set_date_with_options():
    cell = Cell()
    date_2016_utc = datetime(2016, 1, 1, 12, 0, 0, tzinfo=UTC)

    new_york_winter = timezone(timedelta(hours=-5))
    cell.set_date_with_options(date_2016_utc, DateTimeOptions(new_york_winter, "test_format1"))
    assert cell.as_float() == time_to_excel_time(datetime(2016, 1, 1, 7, tzinfo=UTC), False)
    assert cell.num_fmt == "test_format1"

    tokyo = timezone(timedelta(hours=9))
    cell.set_date_with_options(date_2016_utc, DateTimeOptions(tokyo, "test_format2"))
    assert cell.as_float() == time_to_excel_time(datetime(2016, 1, 1, 21, tzinfo=UTC), False)
    assert cell.num_fmt == "test_format2"


def test_set_date_time_with_format():
    cell = Cell(formula="A1")
    cell.set_date_time_with_format(25569.5, "yyyy")
    assert cell.value == "25569.5"
    assert cell.num_fmt == "yyyy"
    assert cell.formula == ""
    assert cell.cell_type == CellType.NUMERIC


@pytest.mark.parametrize(
    "cell_type, data, fallback, expected",
    [
        (CellType.NUMERIC, "string", CellType.STRING, CellType.STRING),
        (None, "string", CellType.NUMERIC, CellType.NUMERIC),
        (CellType.NUMERIC, "300.24", CellType.STRING, CellType.NUMERIC),
        (CellType.NUMERIC, "300", CellType.STRING, CellType.NUMERIC),
        (CellType.BOOL, "1", CellType.STRING, CellType.STRING),
    ],
)
def test_fallback(cell_type, data, fallback, expected):
    assert cell_type_fallback(cell_type, data, fallback) == expected


def test_merge():
    cell = Cell()
    cell.merge(2, 3)
    assert (cell.h_merge, cell.v_merge) == (2, 3)


def test_set_style_and_validation():
    cell = Cell()
    style = object()
    validation = object()
    cell.set_style(style)
    cell.set_data_validation(validation)
    assert cell.style is style
    assert cell.data_validation is validation