"""
インフラストラクチャ層

エクスポートファイルの読み込み、レポート出力などのファイル I/O を提供します。
"""

from .export_reader import ExportReader
from .output_writer import OutputWriter

__all__ = ["ExportReader", "OutputWriter"]
