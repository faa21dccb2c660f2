"""Data validation rules attached to cells or cell ranges."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from sheetcells.columns import EXCEL_2006_MAX_ROW_INDEX

# Two quote characters around at most 255 characters of list content.
DATA_VALIDATION_FORMULA_MAX_LEN = 257
DATA_VALIDATION_FORMULA_LEN_ERROR = "data validation must be 0-255 characters"

EXTERNAL_SHEET_BANG = "!"
CELL_RANGE_SEPARATOR = ":"


class DataValidationType(enum.Enum):
    """Kind of value a validation accepts; the value is its XML name."""

    NONE = "none"
    CUSTOM = "custom"
    DATE = "date"
    DECIMAL = "decimal"
    LIST = "list"
    TEXT_LENGTH = "textLength"
    TIME = "time"
    WHOLE = "whole"


class DataValidationErrorStyle(enum.Enum):
    """How a spreadsheet reacts to invalid input."""

    STOP = "stop"
    WARNING = "warning"
    INFORMATION = "information"


class DataValidationOperator(enum.Enum):
    """Comparison applied by a range validation."""

    BETWEEN = "between"
    EQUAL = "equal"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    NOT_BETWEEN = "notBetween"
    NOT_EQUAL = "notEqual"


def col_index_to_letters(index: int) -> str:
    """Return the column letters for a zero-based column index (0 -> "A")."""
    if index < 0:
        raise ValueError(f"column index must not be negative: {index}")
    letters = []
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


def _row_index_to_string(index: int) -> str:
    return str(index + 1)


def cell_id_string(x: int, y: int, fixed_x: bool, fixed_y: bool) -> str:
    """Return an A1-style reference, with "$" before fixed parts."""
    col = ("$" if fixed_x else "") + col_index_to_letters(x)
    row = ("$" if fixed_y else "") + _row_index_to_string(y)
    return col + row


@dataclass
class DataValidation:
    """A validation rule and the cell range it applies to."""

    sqref: str = ""
    allow_blank: bool = False
    show_input_message: bool = False
    show_error_message: bool = False
    error_style: str | None = None
    error_title: str | None = None
    error: str | None = None
    prompt_title: str | None = None
    prompt: str | None = None
    type: str = ""
    operator: str = ""
    formula1: str = ""
    formula2: str = ""

    def set_error(
        self, style: DataValidationErrorStyle, title: str | None, msg: str | None
    ) -> None:
        """Set the message shown when invalid data is entered."""
        self.show_error_message = True
        self.error = msg
        self.error_title = title
        if isinstance(style, DataValidationErrorStyle):
            self.error_style = style.value
        else:
            self.error_style = DataValidationErrorStyle.STOP.value

    def set_input(self, title: str | None, msg: str | None) -> None:
        """Set the prompt shown when the cell is selected."""
        self.show_input_message = True
        self.prompt_title = title
        self.prompt = msg

    def set_drop_list(self, keys: list[str]) -> None:
        """Offer a fixed list of values to choose from."""
        formula = '"' + ",".join(keys) + '"'
        if len(formula.encode("utf-8")) > DATA_VALIDATION_FORMULA_MAX_LEN:
            raise ValueError(DATA_VALIDATION_FORMULA_LEN_ERROR)
        self.formula1 = formula
        self.type = DataValidationType.LIST.value

    def set_in_file_list(
        self, sheet: str, x1: int, y1: int, x2: int, y2: int
    ) -> None:
        """Take the list of values from a range in a sheet of the workbook.

        A negative ``y2`` selects down to the last row of the column.
        """
        start = cell_id_string(x1, y1, True, True)
        if y2 < 0:
            y2 = EXCEL_2006_MAX_ROW_INDEX
        end = cell_id_string(x2, y2, True, True)
        escaped = sheet.replace("'", "''")
        self.formula1 = (
            "'" + escaped + "'" + EXTERNAL_SHEET_BANG + start + CELL_RANGE_SEPARATOR + end
        )
        self.type = DataValidationType.LIST.value

    def set_range(
        self,
        f1: int,
        f2: int,
        validation_type: DataValidationType,
        operator: DataValidationOperator,
    ) -> None:
        """Restrict values by comparing them with one or two bounds."""
        formula1, formula2 = str(f1), str(f2)
        if operator in (
            DataValidationOperator.BETWEEN,
            DataValidationOperator.NOT_BETWEEN,
        ) and f1 > f2:
            formula1, formula2 = formula2, formula1
        self.formula1 = formula1
        self.formula2 = formula2
        self.type = validation_type.value
        self.operator = operator.value


def new_data_validation(
    start_row: int, start_col: int, end_row: int, end_col: int, allow_blank: bool
) -> DataValidation:
    """Create a validation covering the given zero-based cell range."""
    start_x = col_index_to_letters(start_col)
    start_y = _row_index_to_string(start_row)
    end_x = col_index_to_letters(end_col)
    end_y = _row_index_to_string(end_row)
    sqref = start_x + start_y
    if start_x != end_x or start_y != end_y:
        sqref += CELL_RANGE_SEPARATOR + end_x + end_y
    return DataValidation(sqref=sqref, allow_blank=allow_blank)