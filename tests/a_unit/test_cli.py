"""Unit tests for the es2yui command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from es2yui.cli import create_parser, main


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A small module tree, with the working directory set to its root."""
    (tmp_path / "lib").mkdir()
    (tmp_path / "main.js").write_text(
        "import { square } from './lib/math';\nexport var area = square(3);\n"
    )
    (tmp_path / "lib" / "math.js").write_text(
        "export function square(n) {\n  return n * n;\n}\n"
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestParser:
    """Tests for argument parsing."""

    def test_build_arguments(self) -> None:
        args = create_parser().parse_args(
            ["build", "a.js", "b.js", "--root", "src", "-o", "out"]
        )
        assert args.command == "build"
        assert args.files == ["a.js", "b.js"]
        assert args.root == "src"
        assert args.out == "out"

    def test_deps_arguments(self) -> None:
        args = create_parser().parse_args(["deps", "--config", "x.yaml"])
        assert args.command == "deps"
        assert args.files == []
        assert args.config == "x.yaml"


class TestMain:
    """Tests for running commands."""

    def test_no_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1
        assert "usage: es2yui" in capsys.readouterr().out

    def test_build_to_stdout(
        self, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["build", "main.js"]) == 0
        out = capsys.readouterr().out
        assert out.startswith(
            'YUI.add("lib/math", function(Y, NAME, __imports__, __exports__) {'
        )
        assert out.index('YUI.add("lib/math", ') < out.index('YUI.add("main", ')
        assert '{"es": true, "requires": ["lib/math"]});' in out

    def test_build_to_directory(self, project: Path) -> None:
        assert main(["build", "main.js", "-o", "out", "--version-marker", "1.0"]) == 0
        wrapped = (project / "out" / "lib" / "math.js").read_text()
        assert wrapped.startswith('YUI.add("lib/math", ')
        assert '}, "1.0", {"es": true, "requires": []});' in wrapped
        assert (project / "out" / "main.js").is_file()

    def test_build_from_config(self, project: Path) -> None:
        (project / "es2yui.yaml").write_text(
            "output_dir: build\nmodules:\n  - main.js\n"
        )
        assert main(["build"]) == 0
        assert (project / "build" / "main.js").is_file()
        assert (project / "build" / "lib" / "math.js").is_file()

    def test_build_without_modules(self, project: Path) -> None:
        assert main(["build"]) == 1

    def test_deps(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["deps", "main.js"]) == 0
        assert capsys.readouterr().out == "lib/math: -\nmain: lib/math\n"

    def test_transpile_error_exit_code(self, project: Path) -> None:
        (project / "bad.js").write_text("export class Bad {}\n")
        assert main(["build", "bad.js"]) == 1

    def test_syntax_error_exit_code(self, project: Path) -> None:
        (project / "broken.js").write_text("var = ;\n")
        assert main(["-q", "build", "broken.js"]) == 1

    def test_unknown_format(self, project: Path) -> None:
        (project / "es2yui.yaml").write_text("format: amd\nmodules: [main.js]\n")
        assert main(["build"]) == 1
