"""
Relevance scoring.

Module structure:
- references.py: Import line and module reference extraction
- scorer.py: RelevanceScorer with weighted keyword scoring and ranking
"""

from contextpack.services.relevance.references import extract_import_lines, extract_references
from contextpack.services.relevance.scorer import RelevanceScorer

__all__ = [
    "RelevanceScorer",
    "extract_import_lines",
    "extract_references",
]
