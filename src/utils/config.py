"""Configuration management for the document sorter.

Loads and validates YAML configuration with sensible defaults
for the OCR collaborator and the classification pipeline.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_NAME = Path("configs") / "config.yaml"


class OCRConfig(BaseModel):
    """Configuration for the Tesseract OCR collaborator."""

    tesseract_cmd: str | None = None
    default_lang: str = "eng"
    psm: int = 3


class ClassificationConfig(BaseModel):
    """Configuration for classification and input sanitization."""

    rules_path: str = "configs/classification_rules.yaml"
    max_input_chars: int = Field(default=100_000, gt=0)
    max_line_length: int = Field(default=1_000, gt=0)


class AppConfig(BaseModel):
    """Top-level application configuration."""

    ocr: OCRConfig = Field(default_factory=OCRConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    log_level: str = "INFO"


def _default_config_path() -> Path:
    if CONFIG_NAME.exists():
        return CONFIG_NAME
    return PROJECT_ROOT / CONFIG_NAME


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    A relative ``classification.rules_path`` set in the file is resolved
    against the directory holding the file, so the rules are found no
    matter where the process was started.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml in the working directory,
            falling back to the one shipped with the project.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = _default_config_path()

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        config = AppConfig(**raw)
        explicit = "rules_path" in (raw.get("classification") or {})
        rules_path = Path(config.classification.rules_path)
        if explicit and not rules_path.is_absolute():
            config.classification.rules_path = str(path.parent / rules_path)
            logger.debug("Resolved rules path to %s", config.classification.rules_path)
        return config

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
