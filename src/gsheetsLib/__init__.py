from . import coercion, address
from .client import ClientWrapper
from .core import Spreadsheet, Sheet
from .models import (CellValue, SheetContext, SheetInfo, SpreadsheetInfo,
                     SheetsError, SheetNotFoundError, TransportError)

__all__ = ['ClientWrapper', 'Spreadsheet', 'Sheet', 'CellValue', 'SheetContext', 'SheetInfo',
           'SpreadsheetInfo', 'SheetsError', 'SheetNotFoundError', 'TransportError',
           'coercion', 'address']
