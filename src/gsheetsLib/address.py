import logging
from .models import SheetInfo, SheetNotFoundError, SpreadsheetInfo

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

def resolve(sheet_title: str, notation: str) -> str:
    """
    Builds the fully-qualified range sent to the API, e.g. `Sheet1!A1:C10`.

    The title is used as-is: names that need quoting (spaces followed by
    digits, `!`, `'`) must be quoted by the caller.
    """
    return f'{sheet_title}!{notation}'

def find_sheet(spreadsheet: SpreadsheetInfo, title: str) -> SheetInfo:
    """
    Returns the first tab whose title matches exactly (case-sensitive), in metadata order.

    Raises:
        SheetNotFoundError: if no tab has that title.
    """
    for sheet in spreadsheet.sheets:
        if sheet.title == title:
            return sheet
    logger.warning(f'Sheet {title} not found in spreadsheet {spreadsheet.spreadsheet_id}.')
    raise SheetNotFoundError(title, function_name='find_sheet')

def find_sheet_by_id(spreadsheet: SpreadsheetInfo, sheet_id: int) -> SheetInfo:
    "Same as find_sheet, matching the tab's numeric id instead of its title."
    for sheet in spreadsheet.sheets:
        if sheet.sheet_id == sheet_id:
            return sheet
    logger.warning(f'Sheet ID {sheet_id} not found in spreadsheet {spreadsheet.spreadsheet_id}.')
    raise SheetNotFoundError(sheet_id, function_name='find_sheet_by_id')
