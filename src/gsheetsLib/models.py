from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

class SheetsError(Exception):
    """
    Base exception for API or library failures.

    It carries the same details the library attaches to every failed operation,
    so callers can handle errors consistently without parsing messages.

    Attributes:
        message (str): A human-readable description of the error.
        code (int, optional): The HTTP status code (e.g., 404, 500) or internal error code.
        reason (str, optional): The API error reason (e.g., 'invalid_grant', 'notFound').
        function_name (str, optional): The name of the method/function where the error occurred.
            Useful for debugging the call stack.
        details (Any, optional): Raw error payload or request information.
    """
    def __init__(self,
                 message: str,
                 code: Optional[int] = None,
                 reason: Optional[str] = None,
                 function_name: Optional[str] = None,
                 details: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.reason = reason
        self.function_name = function_name
        self.details = details

    def __str__(self):
        if self.code is not None:
            return f'[{self.code}] {self.message}'
        return self.message

class SheetNotFoundError(SheetsError):
    """
    Raised when a sheet lookup has no match in the spreadsheet's metadata.

    Attributes:
        title (str | int): The exact title (or numeric sheet id) that was requested.
    """
    def __init__(self, title: Union[str, int], function_name: Optional[str] = None):
        super().__init__(f'Sheet not found: {title}', code=404, reason='notFound',
                         function_name=function_name)
        self.title = title

class TransportError(SheetsError):
    """Any failure surfaced by the API call itself: network, auth, quota or a malformed request."""

CellKind = Literal['text', 'number', 'bool', 'empty']
"""
Type tag of a CellValue.

Values:
    text: A string cell.
    number: An int or float cell.
    bool: A boolean cell.
    empty: An absent cell (null on the wire).
"""

@dataclass(frozen=True)
class CellValue:
    """
    A loosely-typed cell value, tagged with its kind.

    Values read from the API keep the type the API reported. Values built from
    strings by the library are always `text`, even when they look like numbers:
    re-typing is left to the backend (see `InputOption`).

    Attributes:
        kind (CellKind): The value's type tag.
        value (str | int | float | bool | None): The payload. `None` only for `empty`.

    Example:
        ```python
        CellValue.from_wire(3.0)    # CellValue(kind='number', value=3.0)
        str(CellValue.number(3.0))  # '3'
        str(CellValue.boolean(True))  # 'TRUE'
        ```
    """
    kind: CellKind
    value: Union[str, int, float, bool, None] = None

    @classmethod
    def text(cls, value: str) -> "CellValue":
        return cls('text', value)

    @classmethod
    def number(cls, value: Union[int, float]) -> "CellValue":
        return cls('number', value)

    @classmethod
    def boolean(cls, value: bool) -> "CellValue":
        return cls('bool', value)

    @classmethod
    def empty(cls) -> "CellValue":
        return cls('empty', None)

    @classmethod
    def from_wire(cls, raw: Any) -> "CellValue":
        """Tags a scalar as decoded from the API's JSON payload."""
        if raw is None:
            return cls.empty()
        # bool is a subclass of int, so it has to be checked first.
        if isinstance(raw, bool):
            return cls.boolean(raw)
        if isinstance(raw, (int, float)):
            return cls.number(raw)
        if isinstance(raw, str):
            return cls.text(raw)
        return cls.text(str(raw))

    def to_wire(self) -> Any:
        """Returns the JSON scalar to send in a ValueRange."""
        return self.value

    def __str__(self) -> str:
        if self.kind == 'empty':
            return ''
        if self.kind == 'bool':
            return 'TRUE' if self.value else 'FALSE'
        if self.kind == 'number':
            return _format_number(self.value) # type: ignore
        return str(self.value)

def _format_number(value: Union[int, float]) -> str:
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)
    return str(value)

@dataclass(frozen=True)
class SheetInfo:
    """
    Descriptor of a single tab, as listed in the Spreadsheet's metadata.

    Attributes:
        title (str): The tab name, the same as in Google Sheets.
        sheet_id (int): Numeric id that uniquely identifies the tab in its Spreadsheet.
        index (int): Position of the tab in the Spreadsheet.
        row_count (int): Count of rows in the tab's grid at fetch time.
        column_count (int): Count of columns in the tab's grid at fetch time.
    """
    title: str
    sheet_id: int
    index: int = 0
    row_count: int = 0
    column_count: int = 0

    @classmethod
    def from_properties(cls, properties: dict) -> "SheetInfo":
        grid = properties.get('gridProperties', {})
        return cls(
            title = properties['title'],
            sheet_id = properties['sheetId'],
            index = properties.get('index', 0),
            row_count = grid.get('rowCount', 0),
            column_count = grid.get('columnCount', 0)
        )

@dataclass(frozen=True)
class SpreadsheetInfo:
    """
    Read-only snapshot of a Spreadsheet's metadata.

    It is built once from the `spreadsheets.get` payload and never synced again;
    fetch a new one to see tabs created or renamed since.

    Attributes:
        spreadsheet_id (str): The unique ID of the Spreadsheet (found in the URL).
        title (str): The Spreadsheet's title.
        locale (str): The locale of the spreadsheet (e.g., 'en_US', 'pt_BR').
        timezone (str): The timezone of the spreadsheet.
        sheets (tuple[SheetInfo, ...]): Tab descriptors, in the order the API returned them.
    """
    spreadsheet_id: str
    title: str = ''
    locale: str = ''
    timezone: str = ''
    sheets: tuple[SheetInfo, ...] = ()

    @classmethod
    def from_metadata(cls, metadata: dict) -> "SpreadsheetInfo":
        properties = metadata.get('properties', {})
        return cls(
            spreadsheet_id = metadata['spreadsheetId'],
            title = properties.get('title', ''),
            locale = properties.get('locale', ''),
            timezone = properties.get('timeZone', ''),
            sheets = tuple(SheetInfo.from_properties(sheet['properties'])
                           for sheet in metadata.get('sheets', []))
        )

@dataclass(frozen=True)
class SheetContext:
    """Everything a sheet operation needs to address its tab."""
    spreadsheet_id: str
    title: str
    sheet_id: int

StringMatrix = list[list[str]]
ValueMatrix = list[list[CellValue]]

InputOption = Literal['RAW', 'USER_ENTERED']
"""
Determines how input data should be interpreted.

Values:
    RAW: The values the user has entered will not be parsed and will be stored as-is.
    USER_ENTERED: The values will be parsed as if the user typed them into the UI.
                  Numbers will stay as numbers, but strings may be converted to numbers,
                  dates, etc.
"""

InsertDataOption = Literal['INSERT_ROWS', 'OVERWRITE']
"""
Determines how existing data is changed when new data is appended.

Values:
    INSERT_ROWS: Rows are inserted for the new data.
    OVERWRITE: The new data overwrites existing data in the areas it covers.
"""

ValueRenderOption = Literal['FORMATTED_VALUE', 'UNFORMATTED_VALUE', 'FORMULA']
"""
Determines how values are rendered when read.

Values:
    FORMATTED_VALUE: Values are formatted as shown in the UI, so they come back as strings.
    UNFORMATTED_VALUE: Values are not formatted; numbers and booleans keep their types.
    FORMULA: Formulas are returned unevaluated.
"""
