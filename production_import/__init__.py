"""Production spreadsheet importer: normalizes mining production workbooks into JSON records."""

__version__ = "0.1.0"
