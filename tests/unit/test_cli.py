"""Unit tests for the codefrag command line."""

import io
import json

import pytest

from codefrag.__main__ import main, parse_args


def test_parse_excerpt_arguments():
    """Test parsing of the excerpt subcommand."""
    args = parse_args(["excerpt", "app.py", "12", "--context", "-1"])
    assert args.command == "excerpt"
    assert args.file == "app.py"
    assert args.line == 12
    assert args.context == -1
    assert args.style is None


def test_command_is_required():
    """Test that a subcommand must be given."""
    with pytest.raises(SystemExit):
        parse_args([])


def test_excerpt_prints_html(sample_python_file):
    """Test that the excerpt is printed."""
    out = io.StringIO()
    assert main(["excerpt", sample_python_file, "6", "--context", "0"], out=out) == 0

    html = out.getvalue()
    assert html.startswith('<ol start="6">')
    assert html.count("<li") == 1
    assert 'class="selected"' in html


def test_excerpt_uses_environment_context(sample_python_file, monkeypatch):
    """Test that CODEFRAG_CONTEXT_LINES is the default radius."""
    monkeypatch.setenv("CODEFRAG_CONTEXT_LINES", "1")
    out = io.StringIO()
    assert main(["excerpt", sample_python_file, "6"], out=out) == 0
    assert out.getvalue().count("<li") == 3


def test_excerpt_of_missing_file(tmp_path, capsys):
    """Test the exit status when no excerpt is available."""
    out = io.StringIO()
    assert main(["excerpt", str(tmp_path / "missing.py"), "1"], out=out) == 1
    assert out.getvalue() == ""
    assert "No excerpt available" in capsys.readouterr().err


def test_excerpt_with_bad_style(sample_python_file, capsys):
    """Test that an unknown style is reported as an error."""
    assert main(["excerpt", sample_python_file, "1", "--style", "nope"], out=io.StringIO()) == 1
    assert "Error" in capsys.readouterr().err


def test_args_from_file(tmp_path):
    """Test rendering arguments read from a JSON file."""
    path = tmp_path / "args.json"
    path.write_text(json.dumps([["boolean", True], ["object", "app.User"]]))

    out = io.StringIO()
    assert main(["args", str(path)], out=out) == 0
    assert out.getvalue() == (
        '<em>true</em>, <em>object</em>(<abbr title="app.User">User</abbr>)\n'
    )


def test_args_as_text_from_stdin(monkeypatch):
    """Test rendering named arguments from stdin as text."""
    payload = {"limit": ["scalar", 10], "items": ["array", [["null", None]]]}
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(payload)))

    out = io.StringIO()
    assert main(["args", "--text"], out=out) == 0
    assert out.getvalue() == "'limit' => 10, 'items' => array(null)\n"


def test_args_with_invalid_json(tmp_path, capsys):
    """Test that malformed input is reported, not raised."""
    path = tmp_path / "args.json"
    path.write_text("{not json")

    assert main(["args", str(path)], out=io.StringIO()) == 1
    assert "Error" in capsys.readouterr().err


def test_args_with_wrong_shape(tmp_path, capsys):
    """Test that JSON which is not (kind, value) pairs is reported."""
    path = tmp_path / "args.json"
    path.write_text(json.dumps("just a string"))

    assert main(["args", str(path)], out=io.StringIO()) == 1
    assert "Invalid argument description" in capsys.readouterr().err
