"""Text normalization for raw OCR transcripts.

Produces the two views every later stage works from: the ordered list
of non-empty trimmed lines, and a single upper-cased search string with
all whitespace runs collapsed.
"""

import re
from dataclasses import dataclass

from src.utils.logger import get_logger

logger = get_logger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")
# Control characters that are neither tabs nor line breaks, plus the byte order mark.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0e-\x1b\x1f\x7f\ufeff]")


@dataclass(frozen=True)
class NormalizedText:
    """Line and search-string views of one transcript."""

    lines: tuple[str, ...]
    search_text: str


def normalize(raw: str) -> NormalizedText:
    """Derive the line sequence and search string from raw OCR text.

    Args:
        raw: OCR transcript, possibly empty.

    Returns:
        Normalized views. Empty or whitespace-only input yields no lines
        and an empty search string.
    """
    lines = tuple(stripped for line in raw.splitlines() if (stripped := line.strip()))
    search_text = _WHITESPACE_RUN.sub(" ", raw.upper()).strip()
    return NormalizedText(lines=lines, search_text=search_text)


def _line_body(piece: str) -> str:
    lines = piece.splitlines()
    return lines[0] if lines else ""


def _truncate_line(piece: str, limit: int) -> str:
    body = _line_body(piece)
    return body[:limit] + piece[len(body) :]


def sanitize(
    raw: str | bytes | None,
    max_chars: int = 100_000,
    max_line_length: int = 1_000,
) -> str:
    """Make arbitrary input safe to feed into :func:`normalize`.

    Bytes are decoded as UTF-8 with replacement characters, a leading
    byte order mark and control characters are dropped, and overlong
    lines and texts are truncated. Lines are delimited exactly as
    :meth:`str.splitlines` delimits them, so the per-line limit applies
    to the same lines :func:`normalize` produces.

    Args:
        raw: Transcript as text or bytes. ``None`` is treated as empty.
        max_chars: Upper bound on the returned text length.
        max_line_length: Upper bound on the length of each line.

    Returns:
        Sanitized text.
    """
    if raw is None:
        return ""
    text = raw.decode("utf-8-sig", errors="replace") if isinstance(raw, bytes) else raw
    text = _CONTROL_CHARS.sub("", text)

    pieces = text.splitlines(keepends=True)
    if any(len(_line_body(piece)) > max_line_length for piece in pieces):
        logger.warning("Truncating OCR lines longer than %d characters", max_line_length)
        text = "".join(_truncate_line(piece, max_line_length) for piece in pieces)

    if len(text) > max_chars:
        logger.warning(
            "Truncating OCR text from %d to %d characters", len(text), max_chars
        )
        text = text[:max_chars]
    return text
