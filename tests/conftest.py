"""Shared test fixtures for the document sorter test suite."""

from pathlib import Path

import pytest


@pytest.fixture
def pan_text() -> str:
    """OCR transcript of a PAN card."""
    return (
        "INCOME TAX DEPARTMENT\n"
        "GOVT OF INDIA\n"
        "JOHN SMITH\n"
        "RAMESH SMITH\n"
        "15/08/1985\n"
        "Permanent Account Number\n"
        "ABCDE1234F\n"
    )


@pytest.fixture
def aadhaar_text() -> str:
    """OCR transcript of an Aadhaar card with an address block."""
    return (
        "Government of India\n"
        "Ravi Kumar\n"
        "DOB: 12/03/1990\n"
        "Male\n"
        "1234 5678 9012\n"
        "Address:\n"
        "12 MG Road\n"
        "Bengaluru\n"
        "Karnataka 560001\n"
    )


@pytest.fixture
def voter_text() -> str:
    """OCR transcript of a voter ID card."""
    return (
        "ELECTION COMMISSION OF INDIA\n"
        "IDENTITY CARD\n"
        "ABC1234567\n"
        "Name: Jane Doe\n"
        "Father's Name: John Doe\n"
        "Sex: F\n"
    )


@pytest.fixture
def certificate_text() -> str:
    """OCR transcript of a degree certificate."""
    return (
        "UNIVERSITY OF MUMBAI\n"
        "Degree Certificate\n"
        "This is to certify that\n"
        "Priya Sharma\n"
        "has been awarded the degree of Bachelor of Science\n"
    )


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"
