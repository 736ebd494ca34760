"""Type-specific field extraction from normalized OCR text.

Each document type maps to an ordered tuple of extraction steps. Every
step is best-effort: it returns the fields it found and an empty dict
otherwise, so a later step can override an earlier one (the Aadhaar
DOB label overrides the generic date match).
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from src.classification.models import DocumentType, ExtractedFields
from src.utils.logger import get_logger

from . import patterns

logger = get_logger(__name__)


@dataclass(frozen=True)
class DocumentText:
    """All views of a transcript an extraction step may consult."""

    lines: tuple[str, ...]
    search_text: str
    raw_text: str


ExtractionStep = Callable[[DocumentText], dict[str, str]]


def _first_date(doc: DocumentText) -> dict[str, str]:
    match = patterns.DATE.search(doc.search_text)
    return {"dob": match.group(0)} if match else {}


def _pan_number(doc: DocumentText) -> dict[str, str]:
    match = patterns.PAN_NUMBER.search(doc.search_text)
    return {"id_number": match.group(0)} if match else {}


def _pan_name(doc: DocumentText) -> dict[str, str]:
    """Take the first line that looks like a holder name.

    Header lines mentioning the issuing department are skipped.
    """
    for line in doc.lines:
        upper = line.upper()
        if any(word in upper for word in patterns.PAN_NAME_DENYLIST):
            continue
        if patterns.NAME_LINE.match(upper) and len(upper) >= patterns.PAN_NAME_MIN_LENGTH:
            return {"name": line}
    return {}


def _aadhaar_number(doc: DocumentText) -> dict[str, str]:
    match = patterns.AADHAAR_NUMBER.search(doc.search_text)
    return {"id_number": match.group(0)} if match else {}


def _aadhaar_dob(doc: DocumentText) -> dict[str, str]:
    """Read the labelled birth date from the raw transcript.

    Falls back to the year of birth, which older cards print instead.
    """
    for pattern in (patterns.RAW_AADHAAR_DOB, patterns.RAW_YEAR_OF_BIRTH):
        match = pattern.search(doc.raw_text)
        if match:
            return {"dob": match.group(1)}
    return {}


def _aadhaar_address(doc: DocumentText) -> dict[str, str]:
    for index, line in enumerate(doc.lines):
        if patterns.ADDRESS_MARKER in line.upper():
            following = doc.lines[index + 1 : index + 1 + patterns.ADDRESS_MAX_LINES]
            if following:
                return {"address": patterns.ADDRESS_SEPARATOR.join(following)}
            return {}
    return {}


def _epic_number(doc: DocumentText) -> dict[str, str]:
    match = patterns.EPIC_NUMBER.search(doc.search_text)
    return {"id_number": match.group(0)} if match else {}


def _voter_name(doc: DocumentText) -> dict[str, str]:
    for line in doc.lines:
        if line.upper().startswith("NAME"):
            value = patterns.NAME_LABEL.sub("", line, count=1).strip()
            return {"name": value} if value else {}
    return {}


def _certificate_title(doc: DocumentText) -> dict[str, str]:
    return {"title": patterns.CERTIFICATE_TITLE}


def _issuing_authority(doc: DocumentText) -> dict[str, str]:
    for line in doc.lines:
        upper = line.upper()
        if any(marker in upper for marker in patterns.ISSUER_MARKERS):
            return {"issuing_authority": line}
    return {}


COMMON_STEPS: tuple[ExtractionStep, ...] = (_first_date,)

STRATEGIES: dict[DocumentType, tuple[ExtractionStep, ...]] = {
    DocumentType.PAN_CARD: (_pan_number, _pan_name),
    DocumentType.AADHAAR: (_aadhaar_number, _aadhaar_dob, _aadhaar_address),
    DocumentType.VOTER_ID: (_epic_number, _voter_name),
    DocumentType.CERTIFICATE: (_certificate_title, _issuing_authority),
    DocumentType.UNKNOWN: (),
}


class FieldExtractor:
    """Runs the common step and then the strategy for a document type.

    Args:
        strategies: Steps per document type. Defaults to :data:`STRATEGIES`.
    """

    def __init__(
        self,
        strategies: dict[DocumentType, tuple[ExtractionStep, ...]] | None = None,
    ) -> None:
        self.strategies = STRATEGIES if strategies is None else strategies

    def extract(
        self,
        doc_type: DocumentType,
        lines: Sequence[str],
        search_text: str,
        raw_text: str,
    ) -> ExtractedFields:
        """Extract fields for a classified document.

        Args:
            doc_type: Type chosen by the classifier.
            lines: Trimmed non-empty transcript lines.
            search_text: Upper-cased, whitespace-collapsed transcript.
            raw_text: Transcript as received.

        Returns:
            Fields found; missing ones are left as ``None``.
        """
        doc = DocumentText(tuple(lines), search_text, raw_text)
        found: dict[str, str] = {}
        for step in COMMON_STEPS + self.strategies.get(doc_type, ()):
            found.update(step(doc))

        logger.debug("Extracted %d fields for %s", len(found), doc_type.value)
        return ExtractedFields(**found)
