from __future__ import annotations

import stat
from pathlib import Path

import pytest

from wscheck.errors import FixWriteError
from wscheck.models import RunOptions
from wscheck.scan import fix as fix_module
from wscheck.scan.fix import expand_tabs, fix_content, fix_file
from wscheck.scan.inspect import classify_content


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"a\tb \r\n", b"a   b\n"),
        (b"\tx\n", b"    x\n"),
        (b"abcd\te\n", b"abcd    e\n"),
        (b"ab\t\tc\n", b"ab      c\n"),
        (b"x  \n  \ny\t\n", b"x\n\ny\n"),
        (b"line1\r\nline2\r\n", b"line1\nline2\n"),
        (b"no newline \t", b"no newline"),
        (b"ab\r\tc\n", b"ab c\n"),
        (b"x\r\n\ty\r\n", b"x\n    y\n"),
        (b"clean\n", b"clean\n"),
    ],
)
def test_fix_content(data: bytes, expected: bytes) -> None:
    assert fix_content(data) == expected


def test_expand_tabs_counts_carriage_return_as_a_column() -> None:
    assert expand_tabs(b"ab\r\tc") == b"ab\r c"
    assert expand_tabs(b"a\tb\n\tc") == b"a   b\n    c"


def test_fix_content_is_idempotent() -> None:
    data = b"\tint a;\t \r\n  b\t= 1;  \n\t\t\n"
    once = fix_content(data)
    assert fix_content(once) == once
    assert classify_content(once) == set()


def test_fixed_lines_never_end_in_blank() -> None:
    fixed = fix_content(b"a \nb\t\nc \t \r\nd")
    for line in fixed.split(b"\n"):
        assert not line.endswith((b" ", b"\t"))


def test_fix_file_rewrites_content(write_file) -> None:
    path = write_file("x.c", b"a\tb \r\n")
    outcome = fix_file(str(path), RunOptions(fix=True))

    assert path.read_bytes() == b"a   b\n"
    assert outcome.content_rewritten
    assert not outcome.executable_cleared
    assert outcome.changed


def test_fix_file_leaves_clean_file_alone(write_file) -> None:
    path = write_file("ok.cpp", b"int a;\n")
    before = path.stat().st_mtime_ns
    outcome = fix_file(str(path), RunOptions(fix=True))

    assert not outcome.changed
    assert path.read_bytes() == b"int a;\n"
    assert path.stat().st_mtime_ns == before


def test_fix_file_ignores_content_of_non_matching_extension(write_file) -> None:
    path = write_file("notes.txt", b"\ta \r\n")
    outcome = fix_file(str(path), RunOptions(fix=True))
    assert not outcome.changed
    assert path.read_bytes() == b"\ta \r\n"


def test_fix_file_clears_executable_regardless_of_extension(write_file) -> None:
    path = write_file("run.txt", b"echo\n", mode=0o775)
    outcome = fix_file(str(path), RunOptions(fix=True, check_executable=True))

    assert outcome.executable_cleared
    assert stat.S_IMODE(path.stat().st_mode) == 0o664


def test_executable_bit_kept_without_flag(write_file) -> None:
    path = write_file("run.c", b"int a;\n", mode=0o755)
    outcome = fix_file(str(path), RunOptions(fix=True))
    assert not outcome.changed
    assert stat.S_IMODE(path.stat().st_mode) == 0o755


def test_both_corrections_count_once(write_file) -> None:
    path = write_file("both.h", b"\tx;\n", mode=0o744)
    outcome = fix_file(str(path), RunOptions(fix=True, check_executable=True))

    assert outcome.executable_cleared and outcome.content_rewritten
    assert outcome.changed is True
    assert path.read_bytes() == b"    x;\n"
    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_rewrite_keeps_file_mode(write_file) -> None:
    path = write_file("mode.java", b"class A {\t}\n", mode=0o600)
    fix_file(str(path), RunOptions(fix=True))
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_no_temp_files_left_behind(write_file, tmp_path: Path) -> None:
    write_file("x.c", b"a \n")
    fix_file(str(tmp_path / "x.c"), RunOptions(fix=True))
    assert sorted(p.name for p in tmp_path.iterdir()) == ["x.c"]


def test_missing_temp_file_is_fatal(write_file, monkeypatch: pytest.MonkeyPatch) -> None:
    path = write_file("x.c", b"a\t\n")

    def _vanishing_write(self: Path, data: bytes) -> int:
        return len(data)

    monkeypatch.setattr(fix_module.Path, "write_bytes", _vanishing_write)
    with pytest.raises(FixWriteError) as excinfo:
        fix_file(str(path), RunOptions(fix=True))

    assert excinfo.value.path == str(path)
    assert path.read_bytes() == b"a\t\n"


def test_temp_write_error_is_fatal(write_file, monkeypatch: pytest.MonkeyPatch) -> None:
    path = write_file("x.c", b"a\t\n")

    def _failing_write(self: Path, data: bytes) -> int:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(fix_module.Path, "write_bytes", _failing_write)
    with pytest.raises(FixWriteError):
        fix_file(str(path), RunOptions(fix=True))
    assert path.read_bytes() == b"a\t\n"
