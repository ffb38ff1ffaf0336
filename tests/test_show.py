"""Tests for the pureshim show command."""

import json
from pathlib import Path

import pytest

pytest.importorskip("tree_sitter")
pytest.importorskip("tree_sitter_c")

from typer.testing import CliRunner  # noqa: E402

from pureshim.show import app  # noqa: E402

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def _header(tmp_path: Path) -> Path:
    path = tmp_path / "api.h"
    path.write_text(
        "int add(int a, int b);  // Add two ints\nvoid reset(void);\n", encoding="utf-8"
    )
    return path


class TestShow:
    def test_json(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--json", str(_header(tmp_path))])
        assert result.exit_code == 0, result.output
        (entry,) = json.loads(result.output)
        assert entry["source"].endswith("api.h")
        add, reset = entry["functions"]
        assert add["name"] == "add"
        assert add["return_type"] == "int"
        assert add["params"] == [{"type": "int", "name": "a"}, {"type": "int", "name": "b"}]
        assert "Add two ints" in add["comment"]
        assert reset["name"] == "reset"
        assert reset["params"] == []

    def test_table(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(_header(tmp_path))])
        assert result.exit_code == 0, result.output
        assert "add" in result.output
        assert "reset" in result.output

    def test_no_prototypes(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.h"
        path.write_text("#define X 1\n", encoding="utf-8")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 0, result.output
        assert "no function prototypes" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "gone.h")])
        assert result.exit_code == 1
        assert "gone.h" in result.output
