"""CSV export package."""

from accountant.export.csv_exporter import (
    CSV_CONTENT_TYPE,
    CSV_HEADER,
    EXPORT_FILENAME,
    export_csv,
    write_csv,
)

__all__ = [
    "CSV_CONTENT_TYPE",
    "CSV_HEADER",
    "EXPORT_FILENAME",
    "export_csv",
    "write_csv",
]
