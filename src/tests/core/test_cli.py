"""
Tests for the generate-polyhedron script.

Validates:
    - Exit status: 0 valid mesh, 2 bad input
    - Bad seed / apex scale / notation reported without a traceback
    - OFF output and the --test self-check

Run with:
    python3 -m pytest tests/core/test_cli.py -v
"""

import os
import importlib.util

import pytest

# Import module with numeric prefix using importlib
_script_path = os.path.join(os.path.dirname(__file__), '..', '..', 'scripts', '01_generate_polyhedron.py')
_spec = importlib.util.spec_from_file_location("generate_polyhedron", _script_path)
_module = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(_module)

main = _module.main


class TestExitStatus:

    def test_expression_ok(self, capsys):
        assert main(["dkD"]) == 0
        out = capsys.readouterr().out
        assert "V=60  E=90  F=32  χ=2" in out
        assert "✓ closed, manifold, consistently wound" in out

    def test_seed_and_notation(self, capsys):
        assert main(["--seed", "cube", "--notation", "k4a"]) == 0
        assert "POLYHEDRON: k4aC" in capsys.readouterr().out

    @pytest.mark.parametrize("argv", [
        ["--seed", "Q"],
        ["--seed", "C", "--notation", "k", "--apex-scale", "nan"],
        ["--seed", "C", "--edge-length", "-1"],
    ])
    def test_bad_value_exits_2(self, argv, capsys):
        assert main(argv) == 2
        assert capsys.readouterr().out.startswith("✗ ")

    def test_bad_notation_points_at_token(self, capsys):
        assert main(["dxD"]) == 2
        lines = capsys.readouterr().out.splitlines()
        assert lines[1].strip() == "dxD"
        assert lines[2] == "   ^"


class TestOutputs:

    def test_off_written(self, tmp_path):
        path = tmp_path / "aC.off"
        assert main(["aC", "--off", str(path)]) == 0
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[:2] == ["OFF", "12 14 0"]

    def test_self_check(self, capsys):
        assert main(["--test"]) == 0
        out = capsys.readouterr().out
        assert "TEST PASSED" in out
        assert out.count("✓ TEST PASSED") == 1
