"""Constants shared across the variant service."""

# Row labels run from 'A' to 'Z'.
MIN_ROWS = 1
MAX_ROWS = 26

# Delimiter of the scan payload printed on each answer sheet.
SCAN_PAYLOAD_DELIMITER = "|"
SCAN_PAYLOAD_FIELDS = 3

# Placeholder for a question a row has no key entry for.
MISSING_KEY_CELL = "-"
