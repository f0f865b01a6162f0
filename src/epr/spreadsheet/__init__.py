from epr.spreadsheet.columns import column_letter_to_number, column_number_to_letter, offset_column

__all__ = [
    "column_letter_to_number",
    "column_number_to_letter",
    "offset_column",
]
