"""Pydantic schemas for the serialized classification result.

The same shape is produced by :meth:`ClassificationResult.to_dict` and
expected from external classifiers (for example a multimodal LLM asked
to answer in this JSON schema), so the rest of an application does not
need to know which path produced a result.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.classification.models import (
    DEFAULT_SUB_FOLDER,
    ClassificationResult,
    DocumentType,
    ExtractedFields,
    FolderCategory,
)
from src.utils.logger import get_logger

logger = get_logger(__name__)


class PayloadError(ValueError):
    """Raised when an external classification payload cannot be used."""


class ExtractedDataPayload(BaseModel):
    """Serialized :class:`ExtractedFields`."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str | None = None
    dob: str | None = None
    id_number: str | None = Field(default=None, alias="idNumber")
    address: str | None = None
    issue_date: str | None = Field(default=None, alias="issueDate")
    issuing_authority: str | None = Field(default=None, alias="issuingAuthority")
    title: str | None = None
    custom_fields: dict[str, str] = Field(default_factory=dict, alias="customFields")

    @field_validator(
        "name",
        "dob",
        "id_number",
        "address",
        "issue_date",
        "issuing_authority",
        "title",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_fields(self) -> ExtractedFields:
        """Convert to domain fields; unrecognised keys become custom fields."""
        custom = dict(self.custom_fields)
        for key, value in (self.model_extra or {}).items():
            if value is not None:
                custom[key] = str(value)
        return ExtractedFields(
            name=self.name,
            dob=self.dob,
            id_number=self.id_number,
            address=self.address,
            issue_date=self.issue_date,
            issuing_authority=self.issuing_authority,
            title=self.title,
            custom_fields=tuple(custom.items()),
        )


class ClassificationPayload(BaseModel):
    """Serialized :class:`ClassificationResult`."""

    model_config = ConfigDict(populate_by_name=True)

    doc_type: str = Field(alias="docType")
    category: str
    sub_folder: str = Field(alias="subFolder")
    extracted_data: ExtractedDataPayload = Field(alias="extractedData")

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "ClassificationPayload":
        """Build a payload from a pipeline result."""
        return cls.model_validate(result.to_dict())

    def to_result(self) -> ClassificationResult:
        """Convert to a domain result.

        Unknown document types and categories fall back to
        ``UNKNOWN`` and ``UNCATEGORIZED``.
        """
        return ClassificationResult(
            doc_type=_coerce(DocumentType, self.doc_type, DocumentType.UNKNOWN),
            category=_coerce(
                FolderCategory, self.category.lower(), FolderCategory.UNCATEGORIZED
            ),
            sub_folder=self.sub_folder.strip().lower() or DEFAULT_SUB_FOLDER,
            extracted_fields=self.extracted_data.to_fields(),
        )


def _coerce(enum_cls: type, value: str, default: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning("Unrecognised %s '%s'", enum_cls.__name__, value)
        return default


def parse_external_payload(data: dict[str, Any] | str) -> ClassificationResult:
    """Validate a classification produced outside the pipeline.

    Args:
        data: JSON object, or its string encoding.

    Returns:
        Equivalent domain result.

    Raises:
        PayloadError: If the JSON is malformed or does not match the schema.
    """
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise PayloadError(f"Invalid JSON payload: {exc}") from exc

    if not isinstance(data, dict):
        raise PayloadError("Classification payload must be a JSON object")

    try:
        payload = ClassificationPayload.model_validate(data)
    except ValidationError as exc:
        raise PayloadError(f"Invalid classification payload: {exc}") from exc
    return payload.to_result()
