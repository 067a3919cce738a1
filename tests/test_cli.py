# SPDX-FileCopyrightText: 2025 Alexandre Gomes Gaigalas <alganet@gmail.com>
#
# SPDX-License-Identifier: ISC

import json
import subprocess
import sys
from importlib.metadata import version
from io import StringIO
from unittest.mock import patch

import pytest

import ioughta.formats
from ioughta.__main__ import main


def test_cli_version_flags_behave_identically() -> None:
    """Test that -v and --version print the package version."""
    expected_output = f"ioughta {version('ioughta')}"

    with pytest.raises(SystemExit) as exc_info_v:
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout_v:
            main(["-v"])

    with pytest.raises(SystemExit) as exc_info_version:
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout_version:
            main(["--version"])

    assert (
        expected_output
        == mock_stdout_v.getvalue().strip()
        == mock_stdout_version.getvalue().strip()
    )
    assert exc_info_v.value.code == exc_info_version.value.code == 0


def test_cli_help_flag() -> None:
    """Test CLI help display with -h flag."""
    with pytest.raises(SystemExit) as exc_info:
        with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
            main(["-h"])

    assert exc_info.value.code == 0
    assert "compile" in mock_stdout.getvalue()


def test_cli_invalid_flag() -> None:
    with pytest.raises(SystemExit) as exc_info:
        with patch("sys.stderr", new_callable=StringIO):
            main(["--invalid-flag"])

    # argparse exits with code 2 for invalid arguments
    assert exc_info.value.code == 2


def test_cli_no_arguments() -> None:
    """Test CLI with no arguments returns 0."""
    assert main([]) == 0


def test_cli_module_execution() -> None:
    """Test that the module can be executed as __main__."""
    result = subprocess.run(
        [sys.executable, "-m", "ioughta", "generate", "A", "_", "B"],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert json.loads(result.stdout) == {"A": 0, "B": 2}


def test_cli_compile() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        result = main(["compile", "A", "_", "B"])

    assert result == 0
    execd: dict[str, object] = {}
    exec(mock_stdout.getvalue(), execd)
    assert (execd["A"], execd["B"]) == (0, 2)


def test_cli_compile_with_generator() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        result = main(
            [
                "compile",
                "A",
                "B",
                "C",
                "--generator",
                "math:factorial",
                "--class-name",
                "Facts",
            ]
        )

    assert result == 0
    output = mock_stdout.getvalue()
    assert "class Facts:" in output
    assert "C = 2" in output


def test_cli_compile_mapping() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        result = main(["compile", "_", "X", "Y", "--mapping", "AXES"])

    assert result == 0
    assert "AXES = {'X': 1, 'Y': 2}" in mock_stdout.getvalue()


def test_cli_compile_mapping_and_class_are_exclusive() -> None:
    with pytest.raises(SystemExit) as exc_info:
        with patch("sys.stderr", new_callable=StringIO):
            main(["compile", "A", "--mapping", "M", "--class-name", "C"])

    assert exc_info.value.code == 2


def test_cli_compile_invalid_name() -> None:
    with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
        result = main(["compile", "not-valid"])

    assert result == 1
    assert "Error compiling constants:" in mock_stderr.getvalue()


def test_cli_generate_json_with_index_name_generator() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        result = main(
            [
                "generate",
                "A",
                "B",
                "C",
                "--generator",
                "operator:mul",
                "--kind",
                "index-name",
            ]
        )

    assert result == 0
    assert json.loads(mock_stdout.getvalue()) == {
        "A": "",
        "B": "B",
        "C": "CC",
    }


def test_cli_generate_constant_generator() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        result = main(
            [
                "generate",
                "A",
                "B",
                "--generator",
                "builtins:int",
                "--kind",
                "constant",
            ]
        )

    assert result == 0
    assert json.loads(mock_stdout.getvalue()) == {"A": 0, "B": 0}


def test_cli_generate_toml() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        result = main(["generate", "--format", "toml", "A", "B"])

    assert result == 0
    assert mock_stdout.getvalue() == "A = 0\nB = 1\n"


def test_cli_generate_ini() -> None:
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        result = main(
            ["generate", "--format", "ini", "--section", "axes", "X", "Y"]
        )

    assert result == 0
    assert mock_stdout.getvalue() == "[axes]\nX = 0\nY = 1\n\n"


def test_cli_generate_duplicate_name() -> None:
    with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
        result = main(["generate", "A", "A"])

    assert result == 1
    assert "Error resolving constants:" in mock_stderr.getvalue()


def test_cli_generate_strict() -> None:
    with patch("sys.stdout", new_callable=StringIO):
        assert main(["generate", "--strict", "A", "B"]) == 0


@pytest.mark.parametrize(
    "ref",
    ["math", "no_such_module_xyz:fn", "math:no_such_attr", "math:pi"],
)
def test_cli_generator_loading_errors(ref: str) -> None:
    with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
        result = main(["generate", "A", "--generator", ref])

    assert result == 1
    assert "Error loading generator:" in mock_stderr.getvalue()


def test_cli_generator_with_wrong_kind() -> None:
    with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
        result = main(
            [
                "compile",
                "A",
                "--generator",
                "math:factorial",
                "--kind",
                "constant",
            ]
        )

    assert result == 1
    assert "does not accept" in mock_stderr.getvalue()


@pytest.mark.parametrize("command", ["compile", "generate"])
def test_cli_failing_generator(command: str) -> None:
    """math.log(0) raises ValueError for the first index."""
    with (
        patch("sys.stdout", new_callable=StringIO) as mock_stdout,
        patch("sys.stderr", new_callable=StringIO) as mock_stderr,
    ):
        result = main([command, "A", "B", "--generator", "math:log"])

    assert result == 1
    assert mock_stdout.getvalue() == ""
    assert "Error running generator:" in mock_stderr.getvalue()


def test_cli_generate_toml_write_error() -> None:
    """Test CLI error handling for TOML when tomli_w is not available."""
    original_tomli_w = ioughta.formats._tomli_w
    ioughta.formats._tomli_w = None

    try:
        with patch("sys.stderr", new_callable=StringIO) as mock_stderr:
            result = main(["generate", "--format", "toml", "A"])

        assert result == 1
        stderr_output = mock_stderr.getvalue()
        assert "Error generating TOML output:" in stderr_output
        assert "TOML output requires tomli_w" in stderr_output
    finally:
        ioughta.formats._tomli_w = original_tomli_w


def test_cli_debug_logs_resolution() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "ioughta", "--debug", "generate", "A"],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert "ioughta.resolver: resolved A = 0 (index 0)" in result.stderr
