"""
ドメイン層

識別子の正規化・差分検知・データモデルを提供します。
"""

from .models import Category, RelationshipKind, FileRecord, ParseResult, CategoryResult
from .normalizer import IdentifierNormalizer
from .diff_detector import DiffDetector, DiffResult, CategoryLoadError

__all__ = [
    "Category",
    "RelationshipKind",
    "FileRecord",
    "ParseResult",
    "CategoryResult",
    "IdentifierNormalizer",
    "DiffDetector",
    "DiffResult",
    "CategoryLoadError",
]
