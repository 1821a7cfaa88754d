"""Placement of generated ORM files on disk and template error reporting."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

VERSION = "0.1.1"

_CONTEXT_LINES = 5


class GenerationError(Exception):
    """Code generation could not complete."""


def resolve_output_dir(output: str, cwd: str | None = None) -> str:
    """Absolute output folder ending in a path separator; defaults to ``temp``."""
    if not output:
        output = "temp"
    if not output.startswith("/"):
        if cwd is None:
            try:
                cwd = os.getcwd()
            except OSError:
                cwd = "."
        output = cwd + os.sep + output
    if not output.endswith(os.sep):
        output += os.sep
    return output


def write_generated(
    output: str,
    table_files: Iterable[Mapping[str, bytes]],
    package_files: Mapping[str, bytes],
) -> list[str]:
    """Write per-table files (one folder per table) and package files; return paths written."""
    output = resolve_output_dir(output)
    written: list[str] = []
    for files in table_files:
        need_mkdir = True
        for path, data in files.items():
            if need_mkdir:
                folder = output + path.rpartition(os.sep)[0]
                try:
                    os.mkdir(folder)
                except FileNotFoundError as exc:
                    raise GenerationError(
                        f"Failed to create folder, please ensure {output[:-1]} exists"
                    ) from exc
                except FileExistsError:
                    pass
                need_mkdir = False
            Path(output + path).write_bytes(data)
            written.append(output + path)
    for path, data in package_files.items():
        Path(output + path).write_bytes(data)
        written.append(output + path)
    print(f"code generated in {output[:-1]}")
    return written


def format_error_context(source: str | bytes, line_num: int) -> str:
    """Lines around ``line_num``, numbered, with the faulty line marked ``>>>>``."""
    text = source.decode() if isinstance(source, bytes) else source
    out = []
    for line, content in enumerate(text.splitlines(), start=1):
        if abs(line - line_num) > _CONTEXT_LINES:
            continue
        prefix = ">>>> " if line == line_num else "% 4d " % line
        out.append(prefix + content + "\n")
    return "".join(out)