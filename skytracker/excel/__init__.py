"""Collection workbook export (openpyxl)."""
from .workbook import CollectionWorkbook, Column
from .collection import export_collection_workbook
