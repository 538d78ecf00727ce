"""Tests for ubiquitous language documentation."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_ubiquitous_language_doc_exists_with_core_terms() -> None:
    glossary_path = _project_root() / "docs" / "ubiquitous-language.md"
    assert glossary_path.exists(), "Expected docs/ubiquitous-language.md to exist."

    text = glossary_path.read_text(encoding="utf-8")
    required_terms = (
        "workbook",
        "sheet",
        "header row",
        "column name",
        "data row",
        "comment row",
        "cell kind",
        "cached result",
        "external name",
        "schema declaration",
        "asset type",
        "record slot",
        "entity record",
        "asset object",
        "coercion",
        "type mismatch",
        "asset root",
        "schema stub",
    )
    for term in required_terms:
        assert term in text.lower(), f"Expected glossary to include term: {term}"
