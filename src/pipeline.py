"""End-to-end document sorting pipeline.

Runs sanitize, normalize, classify, extract and assemble as one forward
pass. The pipeline keeps no per-call state, so one instance can be
shared between threads.
"""

from pathlib import Path

import numpy as np

from src.classification.models import (
    Classification,
    ClassificationResult,
    ExtractedFields,
)
from src.classification.normalizer import normalize, sanitize
from src.classification.rules import DocumentClassifier, load_rules
from src.extraction.field_extractor import FieldExtractor
from src.ocr.tesseract_engine import TesseractEngine
from src.utils.config import ClassificationConfig
from src.utils.logger import get_logger

logger = get_logger(__name__)


def assemble(
    classification: Classification, fields: ExtractedFields
) -> ClassificationResult:
    """Merge classifier and extractor output into a single result.

    ``custom_fields`` always starts empty.
    """
    extracted = ExtractedFields(
        name=fields.name,
        dob=fields.dob,
        id_number=fields.id_number,
        address=fields.address,
        issue_date=fields.issue_date,
        issuing_authority=fields.issuing_authority,
        title=fields.title,
    )
    return ClassificationResult(
        doc_type=classification.doc_type,
        category=classification.category,
        sub_folder=classification.sub_folder,
        extracted_fields=extracted,
    )


class DocumentPipeline:
    """Classifies OCR transcripts and extracts their fields.

    Args:
        config: Classification settings. Rules are loaded once from
            ``config.rules_path`` at construction time.
    """

    def __init__(self, config: ClassificationConfig | None = None) -> None:
        self.config = config or ClassificationConfig()
        self.classifier = DocumentClassifier(load_rules(Path(self.config.rules_path)))
        self.extractor = FieldExtractor()

    def process(self, raw_text: str | bytes | None) -> ClassificationResult:
        """Classify a transcript and extract its fields.

        Args:
            raw_text: OCR output. Bytes are decoded leniently and
                ``None`` is treated as empty text.

        Returns:
            The classification result. Never raises for bad text.
        """
        text = sanitize(
            raw_text,
            max_chars=self.config.max_input_chars,
            max_line_length=self.config.max_line_length,
        )
        normalized = normalize(text)
        classification = self.classifier.classify(normalized.search_text)
        fields = self.extractor.extract(
            classification.doc_type,
            normalized.lines,
            normalized.search_text,
            text,
        )
        result = assemble(classification, fields)
        logger.info(
            "Classified document as %s (%s/%s)",
            result.doc_type.value,
            result.category.value,
            result.sub_folder,
        )
        return result

    def process_image(
        self, image: np.ndarray, ocr_engine: TesseractEngine, psm: int = 3
    ) -> ClassificationResult:
        """Run OCR on an image and classify the resulting transcript.

        OCR errors are not caught here; they belong to the caller.
        """
        ocr_result = ocr_engine.extract_text(image, psm=psm)
        return self.process(ocr_result.text)


def classify_text(raw_text: str) -> ClassificationResult:
    """Classify a transcript using the default classification settings."""
    return DocumentPipeline().process(raw_text)
