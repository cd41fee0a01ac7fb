"""Record ingestion, age derivation, filtering, and per-session state."""
from .dates import parse_date, calculate_age
from .normalize import normalize_record, record_age
from .loader import detect_format, load_records, load_file
from .filtering import parse_threshold, filter_by_min_age
from .session import Session, transition
from .store import SessionStore
