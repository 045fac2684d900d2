"""OutputWriter のユニットテスト"""

import json
from pathlib import Path
from datetime import datetime
import pytest
from src.follow_scanner.infrastructure.output_writer import OutputWriter
from src.follow_scanner.domain.models import Category, CategoryResult
from src.follow_scanner.domain.diff_detector import DiffResult


class TestOutputWriter:
    """OutputWriter のテストケース"""

    @pytest.fixture
    def output_writer(self, tmp_path):
        """OutputWriter インスタンスを作成（一時ディレクトリ使用）"""
        return OutputWriter(tmp_path / "output")

    @pytest.fixture
    def followers(self):
        return CategoryResult(
            category=Category.FOLLOWERS,
            identifiers=["alice", "bob"],
            warnings=['"followers_2.json": could not be parsed as JSON.']
        )

    @pytest.fixture
    def following(self):
        return CategoryResult(category=Category.FOLLOWING, identifiers=["alice", "bob", "carol"])

    @pytest.fixture
    def diff_result(self):
        return DiffResult(not_following_back=["carol"], following_count=3, followers_count=2)

    def test_default_output_dir(self):
        """既定の出力ディレクトリは output"""
        assert OutputWriter().OUTPUT_DIR == Path("output")

    def test_write_output_creates_directory(self, output_writer, followers, following, diff_result):
        """出力ディレクトリが自動作成されることを確認"""
        assert not output_writer.OUTPUT_DIR.exists()

        output_writer.write_output(followers, following, diff_result)

        assert output_writer.OUTPUT_DIR.is_dir()

    def test_write_output_creates_file(self, output_writer, followers, following, diff_result):
        """JSON ファイルが正しく生成されることを確認"""
        output_path = output_writer.write_output(followers, following, diff_result)

        assert output_path.is_file()
        assert output_path == output_writer.report_file
        assert output_path.name == "report.json"

    def test_write_output_json_structure(self, output_writer, followers, following, diff_result):
        """JSON 構造が正しいことを確認"""
        output_path = output_writer.write_output(followers, following, diff_result)

        with open(output_path, encoding="utf-8") as f:
            data = json.load(f)

        assert set(data.keys()) == {"generated_at", "followers", "following", "diff"}
        assert data["followers"] == {
            "count": 2,
            "failed": False,
            "warnings": ['"followers_2.json": could not be parsed as JSON.']
        }
        assert data["following"]["count"] == 3
        assert data["diff"] == {"not_following_back_count": 1, "not_following_back": ["carol"]}

    def test_write_output_timestamp_format(self, output_writer, followers, following, diff_result):
        """タイムスタンプが ISO 8601 (Z サフィックス) であることを確認"""
        output_path = output_writer.write_output(followers, following, diff_result)

        with open(output_path, encoding="utf-8") as f:
            data = json.load(f)

        assert data["generated_at"].endswith("Z")
        datetime.fromisoformat(data["generated_at"][:-1])

    def test_write_text_list(self, output_writer):
        """'@username' を1行1件で出力することを確認"""
        path = output_writer.write_text_list(["carol", "dave"], "not_following_back.txt")

        assert path.read_text(encoding="utf-8") == "@carol\n@dave\n"

    def test_write_text_list_empty(self, output_writer):
        """空リストは空ファイル"""
        path = output_writer.write_text_list([], "empty.txt")

        assert path.read_text(encoding="utf-8") == ""
