import os

import pytest

from gola.codegen import GenerationError, format_error_context, resolve_output_dir, write_generated


def test_resolve_default_relative():
    assert resolve_output_dir("", "/work") == "/work" + os.sep + "temp" + os.sep


def test_resolve_absolute_gets_trailing_separator():
    assert resolve_output_dir("/out/gen", "/ignored") == "/out/gen" + os.sep


def test_resolve_is_idempotent():
    once = resolve_output_dir("build", "/work")
    assert resolve_output_dir(once, "/elsewhere") == once


def test_write_generated(tmp_path, capsys):
    table = {"users" + os.sep + "users.go": b"package users\n", "users" + os.sep + "users_idx.go": b"idx"}
    package = {"db_goladb.go": b"package db\n"}
    written = write_generated(str(tmp_path), [table], package)
    assert (tmp_path / "users" / "users.go").read_bytes() == b"package users\n"
    assert (tmp_path / "users" / "users_idx.go").read_bytes() == b"idx"
    assert (tmp_path / "db_goladb.go").read_bytes() == b"package db\n"
    assert len(written) == 3
    assert str(tmp_path) in capsys.readouterr().out


def test_write_generated_existing_folder(tmp_path):
    (tmp_path / "songs").mkdir()
    write_generated(str(tmp_path), [{"songs" + os.sep + "songs.go": b"x"}], {})
    assert (tmp_path / "songs" / "songs.go").read_bytes() == b"x"


def test_write_generated_missing_output(tmp_path):
    missing = str(tmp_path / "nope")
    with pytest.raises(GenerationError) as info:
        write_generated(missing, [{"t" + os.sep + "t.go": b"x"}], {})
    assert missing in str(info.value)


def test_format_error_context_example():
    assert format_error_context("a\nb\nc", 2) == "   1 a\n>>>> b\n   3 c\n"


def test_format_error_context_window():
    source = "\n".join(f"line{i}" for i in range(1, 21)).encode()
    lines = format_error_context(source, 10).splitlines()
    marked = [l for l in lines if l.startswith(">>>>")]
    assert marked == [">>>> line10"]
    numbers = [int(l.split()[0]) for l in lines if not l.startswith(">>>>")]
    assert all(abs(n - 10) <= 5 for n in numbers)
    assert min(numbers) == 10 - 5 and max(numbers) == 10 + 5