"""Utility helpers for discovering and reading indexable files."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator

LOGGER = logging.getLogger(__name__)

SOURCE_EXTENSIONS = frozenset(
    {
        # languages
        "rs", "py", "js", "ts", "go", "c", "cpp", "h", "hpp",
        "java", "kt", "swift", "rb", "php", "cs", "scala",
        "clj", "hs", "ml", "elm", "ex", "exs", "erl",
        "vim", "lua", "pl",
        # plain text
        "txt", "md", "rst", "org", "tex", "rtf",
        # configuration
        "toml", "yaml", "yml", "json", "config",
        # markup & data
        "xml", "html", "css", "scss", "sass", "less",
        "csv", "sql",
    }
)

PROJECT_BASENAMES = frozenset(
    {
        "readme",
        "license",
        "licence",
        "changelog",
        "changes",
        "history",
        "makefile",
        "dockerfile",
        "containerfile",
        "gitignore",
        "authors",
        "contributors",
        "manifest",
    }
)


def is_parsable(path: Path) -> bool:
    """Return True when the extension or the conventional basename is recognised."""
    extension = path.suffix[1:].lower()
    if extension in SOURCE_EXTENSIONS:
        return True
    # ".gitignore" has no suffix, its stem keeps the leading dot
    stem = path.stem.lower().lstrip(".")
    return stem in PROJECT_BASENAMES


def _is_eligible(entry: os.DirEntry, max_size_bytes: int) -> bool:
    try:
        if not entry.is_file(follow_symlinks=True):
            return False
        size = entry.stat(follow_symlinks=True).st_size
        # A symlinked file is recorded under its target, so the target is tested
        name = Path(os.path.realpath(entry.path)) if entry.is_symlink() else Path(entry.name)
    except OSError as exc:
        LOGGER.debug("Skipping %s: %s", entry.path, exc)
        return False
    return size <= max_size_bytes and is_parsable(name)


def _scan(directory: Path, max_size_bytes: int) -> tuple[list[Path], list[Path]]:
    """Return the eligible files directly in ``directory`` and its subdirectories."""
    files: list[Path] = []
    subdirs: list[Path] = []
    try:
        with os.scandir(directory) as entries:
            children = list(entries)
    except OSError as exc:
        LOGGER.debug("Cannot list %s: %s", directory, exc)
        return files, subdirs

    for entry in children:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            LOGGER.debug("Skipping %s: %s", entry.path, exc)
            continue
        if is_dir:
            subdirs.append(Path(entry.path))
        elif _is_eligible(entry, max_size_bytes):
            files.append(Path(entry.path))
    return files, subdirs


def iter_eligible_files(directory: Path, max_size_bytes: int) -> Iterator[Path]:
    """Yield eligible files below ``directory``.

    Symlinked directories are not descended into, which rules out cycles.
    Entries that cannot be listed or stat'ed are skipped.
    """
    pending = [directory]
    while pending:
        files, subdirs = _scan(pending.pop(), max_size_bytes)
        yield from files
        pending.extend(subdirs)


def _canonical(path: Path) -> Path:
    try:
        return path.resolve()
    except OSError:
        return path.absolute()


def discover_files(
    roots: Iterable[Path], max_size_bytes: int, *, workers: int | None = None
) -> list[Path]:
    """Canonical paths of the eligible files under ``roots``, duplicates included.

    Roots and their top-level subtrees are walked concurrently. A root that is
    itself a regular file is accepted when it is eligible.
    """
    found: list[Path] = []
    subtrees: list[Path] = []

    for root in roots:
        root = Path(root)
        if root.is_file():
            target = _canonical(root)
            try:
                eligible = target.stat().st_size <= max_size_bytes and is_parsable(target)
            except OSError as exc:
                LOGGER.debug("Skipping %s: %s", root, exc)
                continue
            if eligible:
                found.append(target)
            continue
        files, subdirs = _scan(root, max_size_bytes)
        found.extend(_canonical(path) for path in files)
        subtrees.extend(subdirs)

    if subtrees:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            walks = pool.map(
                lambda subtree: list(iter_eligible_files(subtree, max_size_bytes)), subtrees
            )
            for paths in walks:
                found.extend(_canonical(path) for path in paths)
    return found


def collect_files(
    roots: Iterable[Path], max_size_bytes: int, *, workers: int | None = None
) -> set[Path]:
    """Collect eligible files under ``roots`` as a set of canonical paths."""
    found = set(discover_files(roots, max_size_bytes, workers=workers))
    LOGGER.debug("Collected %d eligible files", len(found))
    return found


def read_text(path: Path) -> str | None:
    """Read a file as UTF-8 text, or return None when it cannot be read or decoded."""
    try:
        return Path(path).read_bytes().decode("utf-8")
    except UnicodeDecodeError:
        LOGGER.warning("Not valid UTF-8, indexing as empty: %s", path)
        return None
    except OSError as exc:
        LOGGER.warning("Failed to read %s, indexing as empty: %s", path, exc)
        return None


def load_text(path: Path) -> str:
    """Read a file as UTF-8 text, returning an empty string on any failure."""
    return read_text(path) or ""
