"""Tests for the bytecode compiler."""

from __future__ import annotations

import pytest

from typecat import CompilationError
from typecat.build.compiler import BytecodeCompiler, Compiler


@pytest.fixture
def sources(tmp_path):
    root = tmp_path / "sources"
    pkg = root / "typecat_accessors"
    pkg.mkdir(parents=True)
    (pkg / "Good.py").write_text("class Good:\n    pass\n")
    return root


class TestBytecodeCompiler:
    def test_is_a_compiler(self):
        assert isinstance(BytecodeCompiler(), Compiler)

    def test_mirrors_layout(self, tmp_path, sources):
        out = tmp_path / "classes"
        BytecodeCompiler().compile(
            [sources / "typecat_accessors" / "Good.py"], out, [], source_root=sources
        )
        assert (out / "typecat_accessors" / "Good.pyc").is_file()
        assert not list(out.rglob("*.py"))

    def test_output_is_reproducible(self, tmp_path, sources):
        src = [sources / "typecat_accessors" / "Good.py"]
        BytecodeCompiler().compile(src, tmp_path / "a", [], source_root=sources)
        BytecodeCompiler().compile(src, tmp_path / "b", [], source_root=sources)
        first = (tmp_path / "a" / "typecat_accessors" / "Good.pyc").read_bytes()
        second = (tmp_path / "b" / "typecat_accessors" / "Good.pyc").read_bytes()
        assert first == second

    def test_syntax_error_raises_with_sources(self, tmp_path, sources):
        bad = sources / "typecat_accessors" / "Bad.py"
        bad.write_text("class Bad(:\n")
        files = [sources / "typecat_accessors" / "Good.py", bad]
        with pytest.raises(CompilationError) as exc_info:
            BytecodeCompiler().compile(files, tmp_path / "classes", [], source_root=sources)
        err = exc_info.value
        assert "typecat_accessors/Bad.py" in str(err)
        assert set(err.sources) == {"typecat_accessors/Good.py", "typecat_accessors/Bad.py"}
        assert "class Bad(:" in err.describe()
