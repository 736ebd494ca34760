"""Tesseract OCR wrapper used to obtain document transcripts.

The sorter treats OCR as an opaque capability: an image goes in, plain
text comes out. No image preprocessing is performed here.
"""

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pytesseract
from PIL import Image

from src.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class OCRResult:
    """Transcript of a single image."""

    text: str
    language: str
    confidence: float


def load_image(path: Path) -> np.ndarray:
    """Read an image file into an RGB array.

    Args:
        path: Path to a PNG, JPEG or TIFF file.

    Returns:
        Image as a ``(height, width, 3)`` uint8 array.
    """
    with Image.open(path) as img:
        return np.array(img.convert("RGB"))


class TesseractEngine:
    """Extracts text from document photos with Tesseract.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Default OCR language code.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "eng",
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang

    def extract_text(
        self,
        image: np.ndarray,
        lang: str | None = None,
        psm: int = 3,
    ) -> OCRResult:
        """Extract the plain-text transcript of an image.

        Args:
            image: Input image as a numpy array.
            lang: OCR language code. Defaults to the engine default.
            psm: Tesseract page segmentation mode.

        Returns:
            OCRResult with the transcript and mean word confidence.

        Raises:
            pytesseract.TesseractError: If Tesseract fails on the image.
        """
        lang = lang or self.default_lang
        config = f"--psm {psm}"

        pil_image = Image.fromarray(image)
        text = pytesseract.image_to_string(pil_image, lang=lang, config=config)
        data = pytesseract.image_to_data(
            pil_image,
            lang=lang,
            config=config,
            output_type=pytesseract.Output.DICT,
        )

        confidences = [
            float(conf)
            for conf, word in zip(data["conf"], data["text"])
            if float(conf) > 0 and word.strip()
        ]
        avg_conf = sum(confidences) / len(confidences) / 100.0 if confidences else 0.0

        logger.info(
            "OCR read %d words with average confidence %.2f",
            len(confidences),
            avg_conf,
        )
        return OCRResult(text=text, language=lang, confidence=avg_conf)
