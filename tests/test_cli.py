import io
from pathlib import Path

from rlispy.__main__ import main

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples" / "sources"


def test_dump_file(capsys):
    assert main([str(EXAMPLES_DIR / "add.lisp")]) == 0
    out = capsys.readouterr().out
    assert "Token(kind=<TokenKind.OPEN: 'open'>, value='('" in out
    assert out.rstrip().splitlines()[-1].startswith("Call(items=(Symbol(head='println'")


def test_stdin(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("[1 2]"))
    assert main(["-"]) == 0
    out = capsys.readouterr().out
    assert "List(items=(Integer(value=1), Integer(value=2)))" in out


def test_parse_error_exit_code(capsys):
    assert main([str(EXAMPLES_DIR / "broken.lisp")]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: mismatched bracket")


def test_lex_error_exit_code(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO('"open'))
    assert main([]) == 1
    assert "unterminated string" in capsys.readouterr().err


def test_missing_file(capsys, tmp_path):
    assert main([str(tmp_path / "nope.lisp")]) == 2
    assert "no such file" in capsys.readouterr().err


def test_usage(capsys):
    assert main(["a", "b"]) == 2
    assert "Usage" in capsys.readouterr().err


def test_invalid_utf8_file(capsys, tmp_path):
    path = tmp_path / "latin1.lisp"
    path.write_bytes(b'(print "caf\xe9")')
    assert main([str(path)]) == 1
    assert "not valid UTF-8" in capsys.readouterr().err
