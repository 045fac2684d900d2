"""
パーサー層

エクスポート形式 (JSON / HTML) ごとのユーザー名抽出ロジックを提供します。
"""

from .export_parser import ExportParser, ParsingError
from .entry_extractor import EntryExtractor
from .json_parser import JsonExportParser
from .html_parser import HtmlExportParser

__all__ = [
    "ExportParser",
    "ParsingError",
    "EntryExtractor",
    "JsonExportParser",
    "HtmlExportParser",
]
