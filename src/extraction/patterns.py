"""Named regular expressions and keyword tables used by the sorter.

Patterns prefixed with nothing run against the upper-cased search
string; the ``RAW_`` patterns run against the untouched transcript and
are therefore case-insensitive.
"""

import re

# DD/MM/YYYY or DD-MM-YYYY anywhere in the search string.
DATE = re.compile(r"\d{2}[/\-]\d{2}[/\-]\d{4}")

# PAN: five letters, four digits, one letter, no spaces (ABCDE1234F).
PAN_NUMBER = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")

# Aadhaar UID: three groups of four digits separated by single spaces.
AADHAAR_NUMBER = re.compile(r"\d{4} \d{4} \d{4}")

# EPIC (voter ID): three letters immediately followed by seven digits.
EPIC_NUMBER = re.compile(r"[A-Z]{3}[0-9]{7}")

# Aadhaar "DOB: 01/02/1990" label on the raw transcript.
RAW_AADHAAR_DOB = re.compile(r"DOB\s*[:\-.]?\s*(\d{2}/\d{2}/\d{4})", re.IGNORECASE)

# Aadhaar "Year of Birth: 1990" label, used when no full DOB is printed.
RAW_YEAR_OF_BIRTH = re.compile(r"Year of Birth\s*[:\-.]?\s*(\d{4})", re.IGNORECASE)

# Leading "Name" label with at most one separator.
NAME_LABEL = re.compile(r"^NAME\s*[:\-.]?\s*", re.IGNORECASE)

# A PAN holder name line: letters, whitespace and periods only.
NAME_LINE = re.compile(r"^[A-Z\s.]+$")

PAN_NAME_DENYLIST: tuple[str, ...] = ("INCOME", "INDIA", "GOVT", "ACCOUNT", "NUMBER")
PAN_NAME_MIN_LENGTH = 5

ADDRESS_MARKER = "ADDRESS"
ADDRESS_MAX_LINES = 2
ADDRESS_SEPARATOR = ", "

ISSUER_MARKERS: tuple[str, ...] = ("UNIVERSITY", "INSTITUTE")
CERTIFICATE_TITLE = "Certificate"
