from .models import StringMatrix

def insert_rows_request(sheet_id: int, start_index: int, count: int) -> dict:
    "Builds an insertDimension request opening `count` blank rows before `start_index` (base 0)."
    return {
        'insertDimension' : {
            'range' : {
                'sheetId' : sheet_id,
                'dimension' : 'ROWS',
                'startIndex' : start_index,
                'endIndex' : start_index + count
            }
        }
    }

def set_cells_text_request(sheet_id: int, start_row: int, start_column: int, rows: StringMatrix) -> dict:
    """
    Builds an updateCells request writing `rows` as plain strings, anchored at
    (`start_row`, `start_column`), both base 0.

    Every cell goes as a `stringValue`, so the backend never re-types it. Rows of
    different lengths are sent as they are.
    """
    row_data = [
        {'values' : [{'userEnteredValue' : {'stringValue' : cell}} for cell in row]}
        for row in rows
    ]
    return {
        'updateCells' : {
            'fields' : 'userEnteredValue',
            'rows' : row_data,
            'start' : {
                'sheetId' : sheet_id,
                'rowIndex' : start_row,
                'columnIndex' : start_column
            }
        }
    }
