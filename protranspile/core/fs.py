"""Filesystem primitives for protranspile

Output files are written to a temporary sibling and renamed into place, so a
failed write never leaves a truncated generated file behind.
"""

import os
import tempfile
from pathlib import Path
from typing import List

from protranspile.core.errors import FileSystemError


def create_folder_recursively(path: Path) -> None:
    """Create path and its parents; existing folders are fine"""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemError(path, e) from e


def overwrite_file(path: Path, content: str) -> None:
    """Atomically replace path with content

    Args:
        path: Destination file, its folder is created if missing
        content: Full text to write (UTF-8)

    Raises:
        FileSystemError: If the folder cannot be created or the write fails
    """
    create_folder_recursively(path.parent)
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            'w', encoding='utf-8', newline='\n', dir=path.parent,
            prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise FileSystemError(path, e) from e


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except OSError as e:
        raise FileSystemError(path, e) from e


def read_ts_file_names(folder: Path) -> List[str]:
    """Stems of the TypeScript files directly inside folder, sorted"""
    if not folder.is_dir():
        return []
    return sorted(p.name[:-len(".ts")] for p in folder.iterdir() if p.is_file() and p.name.endswith(".ts"))


def is_up_to_date(source: Path, outputs: List[Path]) -> bool:
    """True if every output exists and is not older than source"""
    if not outputs or not source.exists():
        return False
    source_mtime = source.stat().st_mtime
    return all(out.exists() and out.stat().st_mtime >= source_mtime for out in outputs)
