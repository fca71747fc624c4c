from typing import Optional, Union, TYPE_CHECKING
import logging
import pandas as pd
from .address import resolve, find_sheet, find_sheet_by_id
from .client import ClientWrapper
from .coercion import to_strings, to_loose, from_wire, to_wire
from .config import TOKEN_PATH, CRED_PATH, SCOPES, DEFAULT_INPUT_OPTION
from .instructions import insert_rows_request, set_cells_text_request
from .models import (SheetContext, SheetInfo, SpreadsheetInfo, StringMatrix, ValueMatrix,
                     InputOption, InsertDataOption, ValueRenderOption)
if TYPE_CHECKING:
    from googleapiclient._apis.sheets.v4.schemas import ValueRange, BatchUpdateSpreadsheetRequest  # type: ignore

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

class Spreadsheet:
    """
    Interface to a Google Spreadsheet and factory for its Sheet objects.

    The metadata (title, locale, tabs) is fetched once, when the object is created,
    and kept as a read-only `SpreadsheetInfo` snapshot. Tabs created or renamed
    afterwards are only visible in a new Spreadsheet object.

    For more information on the API, visit:
    https://developers.google.com/workspace/sheets/api/quickstart/python

    Attributes:
        spreadsheet_id (str): The unique ID of the Spreadsheet (found in the URL).
        client (ClientWrapper): Handler for API requests and authentication.
        info (SpreadsheetInfo): Metadata snapshot.

    Args:
        spreadsheet_id (str): The ID found in the Google Sheets URL.
        client (ClientWrapper, optional): Client to reuse. If not given, one is created
            from the token and credential paths.
        token_fp (str, optional): File path to the auth token. Defaults to auth/token.json.
        cred_fp (str, optional): File path to the credentials JSON. Defaults to auth/cred.json.
        scopes (list[str], optional): List of API scopes required. Defaults to SCOPES.

    Raises:
        TransportError: If the metadata request fails.

    Example:
        ```python
        ss = Spreadsheet(spreadsheet_id="1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms")

        tab = ss['Tab Name']
        tab2 = ss.get_sheet_by_id(2084)
        ```
    """
    def __init__(self,
                 spreadsheet_id: str,
                 client: Optional[ClientWrapper] = None,
                 token_fp: str = TOKEN_PATH,
                 cred_fp: str = CRED_PATH,
                 scopes: list[str] = SCOPES):

        self.client = client or ClientWrapper(token_path=token_fp,
                                              credentials_path=cred_fp,
                                              scopes=scopes)
        self.spreadsheet_id = spreadsheet_id
        self.info = self._fetch_info()

    def _fetch_info(self) -> SpreadsheetInfo:
        logger.info(f'Fetching metadata for spreadsheet {self.spreadsheet_id}')
        request = self.client.service.spreadsheets().get(spreadsheetId = self.spreadsheet_id)
        metadata = self.client.execute(request,
                                       function_name = 'Spreadsheet.get',
                                       details = {'spreadsheet_id': self.spreadsheet_id})
        return SpreadsheetInfo.from_metadata(metadata)

    @property
    def name(self) -> str:
        return self.info.title

    @property
    def locale(self) -> str:
        return self.info.locale

    @property
    def timezone(self) -> str:
        return self.info.timezone

    @property
    def sheets(self) -> tuple[SheetInfo, ...]:
        return self.info.sheets

    def get_sheet(self, sheet_name: str) -> "Sheet":
        """
        Returns a `Sheet` for the first tab with this exact title.

        Also available as `spreadsheet['Tab Name']`.

        Raises:
            SheetNotFoundError: If no tab in the snapshot has this title.
        """
        return self._build_sheet(find_sheet(self.info, sheet_name))

    def get_sheet_by_id(self, id: int) -> "Sheet":
        """
        Returns a `Sheet` for the tab with this numeric id. Useful when a tab may be renamed.

        Also available as `spreadsheet[2084]`.

        Raises:
            SheetNotFoundError: If no tab in the snapshot has this id.
        """
        return self._build_sheet(find_sheet_by_id(self.info, id))

    def _build_sheet(self, sheet_info: SheetInfo) -> "Sheet":
        context = SheetContext(spreadsheet_id = self.spreadsheet_id,
                               title = sheet_info.title,
                               sheet_id = sheet_info.sheet_id)
        return Sheet(context, self.client)

    def get_info(self) -> dict:
        """
        Returns a simple dictionary with the Spreadsheet's info. Useful for serialization.
        """
        return {
            'spreadsheet_id' : self.spreadsheet_id,
            'name' : self.name,
            'timezone' : self.timezone,
            'locale' : self.locale,
            'sheets' : {sheet.title: {
                'sheet_id' : sheet.sheet_id,
                'row_count' : sheet.row_count,
                'column_count' : sheet.column_count
            } for sheet in self.sheets}
        }

    def __getitem__(self, sheet: Union[int, str]) -> "Sheet":
        """
        Subscript syntax for both get_sheet (str) and get_sheet_by_id (int).

        Raises:
            TypeError: if the key is neither str nor int.
        """
        if isinstance(sheet, bool):
            raise TypeError(f'Unexpected parameter type: {type(sheet)}.')
        if isinstance(sheet, int):
            return self.get_sheet_by_id(sheet)
        elif isinstance(sheet, str):
            return self.get_sheet(sheet)
        else:
            raise TypeError(f'Unexpected parameter type: {type(sheet)}.')

class Sheet:
    """
    Operations on a single tab.

    Normally obtained from `Spreadsheet.get_sheet`. A Sheet only holds its
    `SheetContext` (spreadsheet id, title, sheet id) and the client, so it does not
    keep its Spreadsheet alive and never changes after creation.

    Every method takes a range in A1 notation relative to the tab (e.g. `A1:C10`,
    `A:A`) and prefixes it with the tab title. Ranges are not validated locally;
    the API reports bad ones as a `TransportError`.

    Args:
        context (SheetContext): Address of the tab.
        client (ClientWrapper): Client interface to handle requests.

    Example:
        ```python
        tab = ss['Tab Name']

        values = tab.get('A1:G22')          # list of rows of str
        tab.update('C3:D4', [['1', '2'],
                             ['3', '4']])
        tab['C3:D4'] = [['1', '2']]         # same as update
        tab.insert_rows(2, [['x', 'y']])    # new row 3, old row 3 moves down
        ```
    """
    def __init__(self, context: SheetContext, client: ClientWrapper):
        self.context = context
        self.client = client

    @property
    def name(self) -> str:
        return self.context.title

    @property
    def id(self) -> int:
        return self.context.sheet_id

    @property
    def spreadsheet_id(self) -> str:
        return self.context.spreadsheet_id

    @property
    def _values(self):
        return self.client.service.spreadsheets().values()

    def get_raw(self, notation: str, render_option: Optional[ValueRenderOption] = None) -> ValueMatrix:
        """
        Reads a range keeping the types the API reports.

        Args:
            notation (str): Range in A1 format. E.g `A1:Q22`, `A:Q`, `C32`.
            render_option (ValueRenderOption, optional): How the API renders values.
                The API default (FORMATTED_VALUE) returns strings only; use
                UNFORMATTED_VALUE to get numbers and booleans.

        Returns:
            ValueMatrix: List of rows of CellValue. Empty list for an empty range.
                Trailing empty cells and rows are omitted by the API.
        """
        request_range = resolve(self.name, notation)
        params = {'spreadsheetId' : self.spreadsheet_id, 'range' : request_range}
        if render_option:
            params['valueRenderOption'] = render_option

        logger.debug(f'Reading {request_range}')
        request = self._values.get(**params)
        result = self.client.execute(request, function_name = 'Sheet.get_raw',
                                     details = {'range': request_range})
        return from_wire((result or {}).get('values', []))

    def get(self, notation: str) -> StringMatrix:
        """Reads a range as a list of rows of strings. See `get_raw`."""
        return to_strings(self.get_raw(notation))

    def update_raw(self, notation: str, values: ValueMatrix, input_option: InputOption) -> None:
        """
        Overwrites a range starting at its top-left cell. Cells outside the range are untouched.

        Args:
            notation (str): Range in A1 format.
            values (ValueMatrix): Rows of CellValue, sent with their own types.
            input_option (InputOption): RAW stores values as-is; USER_ENTERED lets the
                backend parse them as if typed in the UI.
        """
        request_range = resolve(self.name, notation)
        body: ValueRange = {'values' : to_wire(values)} # type: ignore

        logger.debug(f'Updating {request_range} ({len(values)} rows, {input_option})')
        request = self._values.update(
            spreadsheetId = self.spreadsheet_id,
            range = request_range,
            valueInputOption = input_option,
            body = body
        )
        self.client.execute(request, function_name = 'Sheet.update_raw',
                            details = {'range': request_range, 'input_option': input_option})

    def update(self, notation: str, values: StringMatrix) -> None:
        """
        Overwrites a range with strings, parsed by the backend (USER_ENTERED).

        A string like '42' is sent as text and stored as a number by the backend.
        """
        self.update_raw(notation, to_loose(values), DEFAULT_INPUT_OPTION) # type: ignore

    def append_raw(self,
                   notation: str,
                   values: ValueMatrix,
                   input_option: InputOption,
                   insert_data_option: Optional[InsertDataOption] = None) -> None:
        """
        Appends rows after the table found in the range.

        The backend looks for the table in (or below) the range and writes on the
        first empty row after it; the range only delimits where the search starts.

        Args:
            notation (str): Range in A1 format, can be a single cell.
            values (ValueMatrix): Rows of CellValue, sent with their own types.
            input_option (InputOption): See `update_raw`.
            insert_data_option (InsertDataOption, optional): Insert new rows or overwrite
                blank cells. The API default applies when not given.
        """
        request_range = resolve(self.name, notation)
        body: ValueRange = {'values' : to_wire(values)} # type: ignore
        params = {
            'spreadsheetId' : self.spreadsheet_id,
            'range' : request_range,
            'valueInputOption' : input_option,
            'body' : body
        }
        if insert_data_option:
            params['insertDataOption'] = insert_data_option

        logger.debug(f'Appending {len(values)} rows to {request_range} ({input_option})')
        request = self._values.append(**params)
        self.client.execute(request, function_name = 'Sheet.append_raw',
                            details = {'range': request_range, 'input_option': input_option},
                            idempotent = False)

    def append(self, notation: str, values: StringMatrix) -> None:
        """Appends rows of strings, parsed by the backend (USER_ENTERED). See `append_raw`."""
        self.append_raw(notation, to_loose(values), DEFAULT_INPUT_OPTION) # type: ignore

    def clear(self, notation: str) -> None:
        """
        Empties the values of a range, keeping formats and other cell properties.
        """
        request_range = resolve(self.name, notation)

        logger.debug(f'Clearing {request_range}')
        request = self._values.clear(
            spreadsheetId = self.spreadsheet_id,
            range = request_range,
            body = {}
        )
        self.client.execute(request, function_name = 'Sheet.clear',
                            details = {'range': request_range})

    def insert_rows(self, start_index: int, rows: StringMatrix) -> None:
        """
        Inserts `rows` as new rows before `start_index` (base 0), shifting the rows below down.

        Two requests go in a single batchUpdate: one opening `len(rows)` blank rows,
        one filling them from column A. The backend applies them in order and
        atomically, so either both happen or the sheet is left as it was.

        Every cell is written as a string; unlike `update` and `append`, nothing is
        re-typed by the backend.

        Example:
            ```python
            # Before: row 1 = header, row 2 = 'a'. After: header, 'x', 'a'.
            tab.insert_rows(1, [['x']])
            ```
        """
        requests = [
            insert_rows_request(self.id, start_index, len(rows)),
            set_cells_text_request(self.id, start_index, 0, rows)
        ]
        body: BatchUpdateSpreadsheetRequest = {'requests' : requests} # type: ignore

        logger.debug(f'Inserting {len(rows)} rows at index {start_index} of {self.name}')
        request = self.client.service.spreadsheets().batchUpdate(
            spreadsheetId = self.spreadsheet_id,
            body = body
        )
        self.client.execute(request, function_name = 'Sheet.insert_rows',
                            details = {'sheet_id': self.id, 'start_index': start_index},
                            idempotent = False)

    def to_df(self, notation: str, headers: Optional[list] = None) -> pd.DataFrame:
        """
        Reads a range into a DataFrame of strings.

        The first row is used as the header unless `headers` is given. Short rows
        are padded with NaN by pandas.
        """
        values = self.get(notation)
        if not values:
            return pd.DataFrame(columns = headers)
        if headers is None:
            if len(values) > 1:
                headers, values = values[0], values[1:]
            else:
                headers = list(range(len(values[0])))
        return pd.DataFrame(values, columns = headers)

    def to_csv(self, fp, notation: str, sep: str = ',') -> None:
        """Writes a range to a CSV file, without header or index."""
        pd.DataFrame(self.get(notation)).to_csv(fp, index = False, sep = sep, header = False)

    def __str__(self):
        return f'Sheet Object "{self.name}"; Id = {self.id}; Spreadsheet Id = {self.spreadsheet_id}'

    def __getitem__(self, notation: str) -> StringMatrix:
        return self.get(notation)

    def __setitem__(self, notation: str, values: StringMatrix):
        self.update(notation, values)
