"""Tests for result serialization and external payload validation."""

import json

import pytest

from src.classification.models import (
    ClassificationResult,
    DocumentType,
    ExtractedFields,
    FolderCategory,
)
from src.pipeline import classify_text
from src.schemas import (
    ClassificationPayload,
    PayloadError,
    parse_external_payload,
)


def _llm_payload() -> dict:
    return {
        "docType": "Aadhaar Card",
        "category": "identity",
        "subFolder": "aadhaar",
        "extractedData": {
            "name": "Ravi Kumar",
            "dob": "12/03/1990",
            "idNumber": "1234 5678 9012",
            "address": "12 MG Road, Bengaluru",
        },
    }


class TestClassificationPayload:
    """Tests for the pydantic payload model."""

    def test_from_result_uses_camel_case(self) -> None:
        result = ClassificationResult(
            doc_type=DocumentType.PAN_CARD,
            category=FolderCategory.FINANCIAL,
            sub_folder="pan",
            extracted_fields=ExtractedFields(id_number="ABCDE1234F"),
        )
        payload = ClassificationPayload.from_result(result)
        dumped = payload.model_dump(by_alias=True, exclude_none=True)
        assert dumped["docType"] == "PAN Card"
        assert dumped["subFolder"] == "pan"
        assert dumped["extractedData"]["idNumber"] == "ABCDE1234F"

    def test_result_survives_payload(self, pan_text: str) -> None:
        result = classify_text(pan_text)
        assert ClassificationPayload.from_result(result).to_result() == result


class TestParseExternalPayload:
    """Tests for validating externally produced classifications."""

    def test_valid_dict(self) -> None:
        result = parse_external_payload(_llm_payload())
        assert result.doc_type == DocumentType.AADHAAR
        assert result.category == FolderCategory.IDENTITY
        assert result.extracted_fields.id_number == "1234 5678 9012"
        assert result.extracted_fields.custom_fields == ()

    def test_valid_json_string(self) -> None:
        result = parse_external_payload(json.dumps(_llm_payload()))
        assert result.extracted_fields.address == "12 MG Road, Bengaluru"

    def test_unknown_doc_type_falls_back(self) -> None:
        data = _llm_payload()
        data["docType"] = "Driving Licence"
        data["category"] = "Transport"
        result = parse_external_payload(data)
        assert result.doc_type == DocumentType.UNKNOWN
        assert result.category == FolderCategory.UNCATEGORIZED

    def test_category_case_insensitive(self) -> None:
        data = _llm_payload()
        data["category"] = "Identity"
        assert parse_external_payload(data).category == FolderCategory.IDENTITY

    def test_sub_folder_normalized(self) -> None:
        data = _llm_payload()
        data["subFolder"] = "  Aadhaar "
        assert parse_external_payload(data).sub_folder == "aadhaar"

    def test_blank_sub_folder_defaults(self) -> None:
        data = _llm_payload()
        data["subFolder"] = ""
        assert parse_external_payload(data).sub_folder == "uncategorized"

    def test_blank_fields_treated_as_absent(self) -> None:
        data = _llm_payload()
        data["extractedData"]["name"] = "  "
        result = parse_external_payload(data)
        assert result.extracted_fields.name is None
        assert "name" not in result.to_dict()["extractedData"]

    def test_unknown_fields_become_custom(self) -> None:
        data = _llm_payload()
        data["extractedData"]["gender"] = "Male"
        result = parse_external_payload(data)
        assert result.extracted_fields.custom_fields == (("gender", "Male"),)

    def test_explicit_custom_fields_kept(self) -> None:
        data = _llm_payload()
        data["extractedData"]["customFields"] = {"note": "front side"}
        result = parse_external_payload(data)
        assert result.extracted_fields.custom_fields == (("note", "front side"),)

    def test_result_with_custom_fields_is_hashable(self) -> None:
        data = _llm_payload()
        data["extractedData"]["customFields"] = {"note": "front side"}
        result = parse_external_payload(data)
        assert {result: "seen"}[result] == "seen"
        assert result.to_dict()["extractedData"]["customFields"] == {"note": "front side"}

    def test_invalid_json(self) -> None:
        with pytest.raises(PayloadError, match="Invalid JSON"):
            parse_external_payload("{not json")

    def test_non_object(self) -> None:
        with pytest.raises(PayloadError, match="JSON object"):
            parse_external_payload("[1, 2]")

    def test_missing_required_key(self) -> None:
        data = _llm_payload()
        del data["docType"]
        with pytest.raises(PayloadError, match="Invalid classification payload"):
            parse_external_payload(data)
