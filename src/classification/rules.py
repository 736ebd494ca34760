"""Ordered keyword/pattern rules for document classification.

Rules are evaluated in list order against the normalized search string
and the first match wins. A PAN card that happens to carry a 4-4-4
digit group therefore still classifies as PAN, because the PAN rule is
listed before the Aadhaar rule.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from src.utils.logger import get_logger

from .models import Classification, DocumentType, FolderCategory

logger = get_logger(__name__)

# Three 4-digit groups, matched against the whitespace-collapsed search string.
_AADHAAR_DIGIT_GROUPS = re.compile(r"\d{4} \d{4} \d{4}")


@dataclass(frozen=True)
class ClassificationRule:
    """A predicate over the search string paired with its outcome.

    The predicate holds when any of ``any_keywords`` occurs, when every
    one of ``all_keywords`` occurs, or when any of ``patterns`` matches.
    """

    name: str
    outcome: Classification
    any_keywords: tuple[str, ...] = ()
    all_keywords: tuple[str, ...] = ()
    patterns: tuple[re.Pattern[str], ...] = ()

    def matches(self, search_text: str) -> bool:
        """Return whether this rule fires for the given search string."""
        if any(keyword in search_text for keyword in self.any_keywords):
            return True
        if self.all_keywords and all(kw in search_text for kw in self.all_keywords):
            return True
        return any(pattern.search(search_text) for pattern in self.patterns)


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        name="pan_card",
        outcome=Classification(DocumentType.PAN_CARD, FolderCategory.FINANCIAL, "pan"),
        any_keywords=("INCOME TAX",),
        all_keywords=("PERMANENT", "ACCOUNT"),
    ),
    ClassificationRule(
        name="voter_id",
        outcome=Classification(DocumentType.VOTER_ID, FolderCategory.IDENTITY, "voter"),
        any_keywords=("ELECTION COMMISSION", "ELECTOR", "EPIC"),
    ),
    ClassificationRule(
        name="aadhaar",
        outcome=Classification(
            DocumentType.AADHAAR, FolderCategory.IDENTITY, "aadhaar"
        ),
        any_keywords=("AADHAAR", "UNIQUE IDENTIFICATION"),
        patterns=(_AADHAAR_DIGIT_GROUPS,),
    ),
    ClassificationRule(
        name="certificate",
        outcome=Classification(
            DocumentType.CERTIFICATE, FolderCategory.EDUCATION, "certificates"
        ),
        any_keywords=("CERTIFICATE", "UNIVERSITY", "DEGREE", "MARKSHEET"),
    ),
)


class RuleDefinition(BaseModel):
    """Schema of one entry in a classification rules YAML file."""

    name: str
    doc_type: DocumentType
    category: FolderCategory
    sub_folder: str
    any_keywords: list[str] = Field(default_factory=list)
    all_keywords: list[str] = Field(default_factory=list)
    patterns: list[str] = Field(default_factory=list)

    def to_rule(self) -> ClassificationRule:
        """Build an immutable rule, upper-casing keywords to match the search string."""
        return ClassificationRule(
            name=self.name,
            outcome=Classification(
                self.doc_type, self.category, self.sub_folder.lower()
            ),
            any_keywords=tuple(kw.upper() for kw in self.any_keywords),
            all_keywords=tuple(kw.upper() for kw in self.all_keywords),
            patterns=tuple(re.compile(p) for p in self.patterns),
        )


def load_rules(path: Path) -> tuple[ClassificationRule, ...]:
    """Load an ordered rule list from a YAML file.

    The file holds a top-level ``rules`` list. A missing or empty file
    yields :data:`DEFAULT_RULES`.

    Args:
        path: Path to the rules YAML file.

    Returns:
        Rules in evaluation order.
    """
    if not path.exists():
        logger.debug("No rules file at %s, using default rules", path)
        return DEFAULT_RULES

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    entries = data.get("rules") or []
    if not entries:
        logger.debug("Rules file %s is empty, using default rules", path)
        return DEFAULT_RULES

    rules = tuple(RuleDefinition(**entry).to_rule() for entry in entries)
    logger.info("Loaded %d classification rules from %s", len(rules), path)
    return rules


class DocumentClassifier:
    """First-match-wins classifier over an ordered rule list.

    Args:
        rules: Rules in evaluation order. Defaults to :data:`DEFAULT_RULES`.
    """

    def __init__(self, rules: Sequence[ClassificationRule] | None = None) -> None:
        self.rules: tuple[ClassificationRule, ...] = tuple(
            DEFAULT_RULES if rules is None else rules
        )

    def classify(self, search_text: str) -> Classification:
        """Classify a normalized search string.

        Args:
            search_text: Upper-cased, whitespace-collapsed transcript.

        Returns:
            Outcome of the first matching rule, or the
            unknown/uncategorized default when none match.
        """
        for rule in self.rules:
            if rule.matches(search_text):
                logger.debug("Rule '%s' matched", rule.name)
                return rule.outcome
        logger.debug("No classification rule matched")
        return Classification()
