"""
Stage 2: Line Expansion

ЦКП: Записи-кандидаты из строк списка.
"""

from .stage import ExpansionStage, ExpansionResult, ExpandedEntry
from .prefix_extractor import PrefixExtractor
from .segmenter import Segmenter

__all__ = [
    "ExpansionStage",
    "ExpansionResult",
    "ExpandedEntry",
    "PrefixExtractor",
    "Segmenter",
]
