"""Tests for the rewrite_output_file_map script."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# The script lives outside the swift_worker package, in scripts/
sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "scripts"))
from rewrite_output_file_map import main  # noqa: E402

from .conftest import write_map


class TestRewriteScript:
    @pytest.fixture(autouse=True)
    def _setup(self, worker_tmp: Path) -> None:
        self.tmp_dir = worker_tmp

    def test_writes_map_and_prints_relocation_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        input_path = write_map(
            self.tmp_dir / "Lib.output_file_map.json",
            {"a.swift": {"object": "/tmp/a.o", "swift-dependencies": "/tmp/a.swiftdeps"}},
        )
        output_path = self.tmp_dir / "rewritten.json"
        config_path = self.tmp_dir / "incremental.yaml"
        config_path.write_text(f"storage_root: {self.tmp_dir / 'cache'}\n", encoding="utf-8")

        assert main([str(input_path), str(output_path), "--config", str(config_path)]) == 0

        table = json.loads(capsys.readouterr().out)
        rewritten = json.loads(output_path.read_text(encoding="utf-8"))
        assert list(table) == ["/tmp/a.swiftdeps"]
        assert rewritten["a.swift"]["swift-dependencies"] == table["/tmp/a.swiftdeps"]
        assert rewritten["a.swift"]["object"] == "/tmp/a.o"

    def test_returns_one_on_malformed_map(self) -> None:
        input_path = self.tmp_dir / "bad.json"
        input_path.write_text('{"a.swift": "a.o"}', encoding="utf-8")
        output_path = self.tmp_dir / "rewritten.json"

        assert main([str(input_path), str(output_path)]) == 1
        assert not output_path.exists()
