"""Session keys, export labels, and user-facing Hebrew strings."""

from typing import Dict

# ── SESSION ──────────────────────────────────────────────────────────────────
# Key names match what the web client kept in localStorage, so an old client
# and this service agree on the session shape.
SESSION_ROLE_KEY = "lailaTovUserRole"
SESSION_USERNAME_KEY = "lailaTovUsername"

ROLE_COACH = "coach"
ROLE_PARENT = "parent"

# ── CSV EXPORT ───────────────────────────────────────────────────────────────
# Column order is fixed; keys are the row dict keys built by export_service.
CSV_HEADERS: Dict[str, str] = {
    "date": "תאריך",
    "stage": "שלב בתהליך",
    "cycle_number": "מספר מחזור שינה",
    "bedtime": "שעת השכבה",
    "time_to_sleep": "כמה זמן עד שנרדם/ה",
    "who_put_to_sleep": "מי הרדים/ה",
    "how_fell_asleep": "איך נרדמ/ה",
    "wake_time": "שעת יקיצה",
}

CSV_BOM = "\ufeff"
CSV_EMPTY_CYCLE_PLACEHOLDER = "-"
CSV_NO_SLEEP_DATA = "אין נתוני שינה"
CSV_FILENAME_PREFIX = "LailaTov_Data_"
CSV_ARCHIVE_FILENAME = "LailaTov_Data.zip"

# Anything outside latin letters/digits, Hebrew letters, '_', '.', '-' becomes '_'
SAFE_FILENAME_PATTERN = r"[^a-z0-9א-ת_.-]"

# ── MESSAGES ─────────────────────────────────────────────────────────────────
MSG_NO_ACTIVE_BABIES = "אין תינוקות פעילים לייצוא."
MSG_EMPTY_USERNAME = "נא להזין שם משתמש."
MSG_NOT_AVAILABLE = "לא זמין"
MSG_NO_DATA = "אין נתונים"
