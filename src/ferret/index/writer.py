"""Prolog fact-base writer.

The output holds three kinds of facts, one per line::

    document(ID, 'Path', 'Name').
    token(DocID, 'Token', TF_IDF_Score).
    vocab('Token', IDF_Score).

Each kind is sorted by key so that unchanged input produces identical files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from ferret.models import Document, Index

LOGGER = logging.getLogger(__name__)


_ESCAPES = {"\\": "\\\\", "'": "\\'", "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if ord(char) < 0x20 or ord(char) in (0x7F, 0x85, 0x2028, 0x2029):
        # Prolog hex escape, closed by a backslash
        return f"\\x{ord(char):x}\\"
    return char


def escape_atom(text: str) -> str:
    """Escape a string for use inside a single-quoted Prolog atom.

    Control characters are escaped as well, so every fact stays on one line.
    """
    return "".join(_escape_char(char) for char in text)


def format_document(document: Document) -> str:
    return "document({}, '{}', '{}').".format(
        document.id, escape_atom(str(document.path)), escape_atom(document.name)
    )


def format_token(doc_id: int, token: str, score: float) -> str:
    return f"token({doc_id}, '{escape_atom(token)}', {score:.6f})."


def format_vocab(token: str, idf: float) -> str:
    return f"vocab('{escape_atom(token)}', {idf:.6f})."


def iter_facts(index: Index) -> Iterator[str]:
    """Yield the lines of the fact base, comments and blank separators included."""
    yield "% Document facts: document(ID, Path, Name)"
    for document in sorted(index.documents, key=lambda doc: doc.id):
        yield format_document(document)
    yield ""

    yield "% Token facts: token(DocID, Token, TF_IDF_Score)"
    for (doc_id, token), score in sorted(index.scores.items()):
        if score != 0.0:
            yield format_token(doc_id, token, score)
    yield ""

    yield "% Vocabulary facts: vocab(Token, IDF_Score)"
    for token, idf in sorted(index.vocabulary.items()):
        yield format_vocab(token, idf)


def write_facts(output_path: Path, index: Index) -> int:
    """Write ``index`` to ``output_path`` and return the number of facts written."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    written = 0
    with output_path.open("w", encoding="utf-8", newline="\n") as handle:
        for line in iter_facts(index):
            handle.write(line + "\n")
            if line and not line.startswith("%"):
                written += 1

    LOGGER.info("Wrote %d facts to %s", written, output_path)
    return written
