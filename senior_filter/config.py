"""
Senior Filter — Configuration: paths, limits, column names, messages.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with SENIOR_FILTER_DATA_DIR env var for cloud deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("SENIOR_FILTER_DATA_DIR", str(Path.home() / "Senior Filter")))
EXPORTS_FOLDER = _data_dir / "exports"

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------
MAX_UPLOAD_MB = int(os.environ.get("MAX_UPLOAD_MB", "20"))
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024

# Idle sessions are dropped after this many minutes
SESSION_TTL_MINUTES = int(os.environ.get("SESSION_TTL_MINUTES", "120"))
SESSION_COOKIE = "senior_filter_session"

# Rows shown before "Show More"
PREVIEW_ROWS = 8

# ---------------------------------------------------------------------------
# Recognised columns (exact, case-sensitive)
# ---------------------------------------------------------------------------
AGE_COLUMN = "Age"
DOB_COLUMNS = ["DOB", "Date of Birth"]  # priority order

# Day/month/year separators
DATE_SEPARATORS = ".-/"

# ---------------------------------------------------------------------------
# File formats
# ---------------------------------------------------------------------------
EXCEL_EXTENSIONS = (".xlsx", ".xls")
CSV_EXTENSIONS = (".csv",)

EXPORT_FILENAME = "filtered_data.xlsx"
EXPORT_SHEET_NAME = "Filtered Data"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# ---------------------------------------------------------------------------
# User-facing messages
# ---------------------------------------------------------------------------
MSG_NO_FILE = "Please upload a file."
MSG_UNSUPPORTED_FORMAT = "Unsupported file format. Please upload Excel (.xlsx, .xls) or CSV (.csv) files."
MSG_NO_THRESHOLD = "Please enter a minimum age value."
MSG_BAD_THRESHOLD = "Minimum age must be a whole number of zero or more."
MSG_NO_RESULTS = "No results found for the given age filter."
MSG_UNREADABLE = "Could not read the uploaded file."
MSG_TOO_LARGE = f"File is larger than {MAX_UPLOAD_MB} MB."
MSG_NOTHING_TO_EXPORT = "There are no filtered records to export."
