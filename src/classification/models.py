"""Domain types produced by the classification pipeline.

Every object here is created fresh for a single document and never
mutated afterwards.
"""

from dataclasses import dataclass
from enum import StrEnum


class DocumentType(StrEnum):
    """Closed set of recognised document types."""

    AADHAAR = "Aadhaar Card"
    VOTER_ID = "Voter ID"
    PAN_CARD = "PAN Card"
    CERTIFICATE = "Certificate"
    UNKNOWN = "Other Document"


class FolderCategory(StrEnum):
    """Top-level folder a document is filed under."""

    IDENTITY = "identity"
    FINANCIAL = "financial"
    EDUCATION = "education"
    UNCATEGORIZED = "uncategorized"


DEFAULT_SUB_FOLDER = "uncategorized"


@dataclass(frozen=True)
class Classification:
    """Outcome of the ordered rule evaluation."""

    doc_type: DocumentType = DocumentType.UNKNOWN
    category: FolderCategory = FolderCategory.UNCATEGORIZED
    sub_folder: str = DEFAULT_SUB_FOLDER


# Attribute name -> serialized key, in output order.
FIELD_KEYS: dict[str, str] = {
    "name": "name",
    "dob": "dob",
    "id_number": "idNumber",
    "address": "address",
    "issue_date": "issueDate",
    "issuing_authority": "issuingAuthority",
    "title": "title",
}


@dataclass(frozen=True)
class ExtractedFields:
    """Fields recovered from a document.

    ``None`` means the field was not found. ``custom_fields`` holds
    user-added data as ``(key, value)`` pairs so the record stays
    hashable. The extractor never fills it in.
    """

    name: str | None = None
    dob: str | None = None
    id_number: str | None = None
    address: str | None = None
    issue_date: str | None = None
    issuing_authority: str | None = None
    title: str | None = None
    custom_fields: tuple[tuple[str, str], ...] = ()

    def to_dict(self) -> dict[str, object]:
        """Serialize found fields using camelCase keys.

        Absent fields are omitted, as is an empty ``customFields``.
        """
        data: dict[str, object] = {
            key: getattr(self, attr)
            for attr, key in FIELD_KEYS.items()
            if getattr(self, attr) is not None
        }
        if self.custom_fields:
            data["customFields"] = dict(self.custom_fields)
        return data


@dataclass(frozen=True)
class ClassificationResult:
    """Sole output of the pipeline for one document."""

    doc_type: DocumentType
    category: FolderCategory
    sub_folder: str
    extracted_fields: ExtractedFields

    def to_dict(self) -> dict[str, object]:
        """Return a plain key/value structure suitable for persistence."""
        return {
            "docType": self.doc_type.value,
            "category": self.category.value,
            "subFolder": self.sub_folder,
            "extractedData": self.extracted_fields.to_dict(),
        }
