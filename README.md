# sheetcells

Building blocks for working with spreadsheet (XLSX-style) data in plain Python:

- **Cells** (`sheetcells.cell`): typed cell values (string, numeric, boolean,
  formula, error, date) and conversions between the stored text and Python
  values.
- **Dates** (`sheetcells.dates`): converting between `datetime` values and
  Excel's floating-point day serials, in both the 1900 and 1904 date systems.
- **Columns** (`sheetcells.columns`): a store of column definitions that keeps
  column ranges from overlapping by trimming, splitting or replacing existing
  ranges when a new one is added.
- **Data validation** (`sheetcells.validation`): drop-down lists, in-file list
  references and numeric or text-length range rules for cell ranges.

The package has no runtime dependencies.

## Installation

```
pip install sheetcells
```

For running the test suite:

```
pip install "sheetcells[test]"
pytest
```

## Cells

```python
from sheetcells.cell import Cell, CellType

cell = Cell()
cell.set_float(37947.75334343)
cell.value          # "37947.75334343"
cell.as_float()     # 37947.75334343
cell.as_int()       # 37947

cell.set_bool(True)
cell.as_bool()      # True

cell.set_formula("10+20")
cell.formula        # "10+20"
cell.cell_type      # CellType.NUMERIC
```

`Cell.set_value` picks the cell type from the Python type: integers and floats
become numeric cells with the `"general"` format, `datetime` values become
numeric date serials, and strings, bytes, `None` and anything else are stored
as strings. Floats are always written in plain decimal notation, never in
scientific notation.

`Cell.parse_int` reads the value as a 64-bit decimal integer, while
`Cell.as_int` parses it as a number and truncates toward zero. Conversions that
cannot work, such as `as_float()` on a cell that holds `"Fudge Cake"`, raise
`ValueError`.

Dates are stored with `set_date`, `set_date_time` or `set_date_with_options`;
a `DateTimeOptions` value gives the time zone whose wall-clock time is stored
and the number format recorded on the cell. `get_time` turns the stored serial
back into a UTC `datetime`.

`cell_type_fallback` keeps `CellType.NUMERIC` only when the data parses as a
number, and otherwise returns the given fallback type.

## Dates

```python
from datetime import datetime, timezone
from sheetcells.dates import time_from_excel_time, time_to_excel_time

time_to_excel_time(datetime(2018, 6, 18, tzinfo=timezone.utc), False)   # 43269.0
time_from_excel_time(41275.0, False)    # 2013-01-01 00:00:00+00:00
time_from_excel_time(39813.0, True)     # 2013-01-01 in the 1904 date system
```

Serials up to and including 61 are handled with Excel's Julian-calendar
rules, which account for the fictitious 29 February 1900. Naive datetimes are
treated as UTC. `fraction_of_a_day` and `julian_date_to_gregorian_time` are
available as well.

## Columns

```python
from sheetcells.columns import ColStore, new_col_for_range

store = ColStore()
store.add(new_col_for_range(1, 8))
store.add(new_col_for_range(4, 5))   # splits 1-8 into 1-3, 4-5 and 6-8

[(col.min, col.max) for col in store]   # [(1, 3), (4, 5), (6, 8)]
len(store)                              # 3
store.find_col_by_index(7)              # the 6-8 column
```

Each `Col` carries a width (`set_width` also marks it as a custom width), an
outline level, a style, a number format chosen by `set_type`, and hidden,
collapsed, best-fit and phonetic flags. `Col.copy_to_range` duplicates a
definition for a different range, and `ColStore.get_or_make_cols_for_range`
returns the columns covering a range, creating definitions for any gaps.

## Data validation

```python
from sheetcells.validation import (
    DataValidationErrorStyle,
    DataValidationOperator,
    DataValidationType,
    new_data_validation,
)

rule = new_data_validation(0, 0, 0, 0, True)    # cell A1
rule.set_drop_list(["a1", "a2", "a3"])
rule.formula1   # '"a1,a2,a3"'

rule.set_in_file_list("Sheet ' 2", 2, 1, 3, 10)
rule.formula1   # "'Sheet '' 2'!$C$2:$D$11"

rule.set_range(15, 4, DataValidationType.TEXT_LENGTH, DataValidationOperator.BETWEEN)
rule.formula1, rule.formula2    # ("4", "15")

rule.set_error(DataValidationErrorStyle.WARNING, "Title", "Message")
rule.set_input("Title", "Prompt")
```

`set_drop_list` raises `ValueError` when the quoted list is longer than 257
bytes (255 characters of content plus the two quotes). Passing a negative end
row to `set_in_file_list` selects down to the last row of the sheet.
`col_index_to_letters` and `cell_id_string` build A1-style references from
zero-based indexes.

## What this package does not do

There are no workbooks, sheets or rows here, and nothing that reads or writes
XLSX files. Number formats are stored on cells and columns as plain strings but
are not applied: there is no formatted display of cell values. Styles are held
as opaque values and are not interpreted.