"""TF-IDF aggregation over tokenized documents.

Given ``N`` documents:

* ``df(t)`` is the number of documents containing ``t`` at least once,
* ``tf(d, t) = count(d, t) / total token occurrences of d``,
* ``idf(t) = ln(N / df(t))`` with no smoothing, so a token present in every
  document gets an IDF of zero,
* ``tfidf(d, t) = tf(d, t) * idf(t)``.
"""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import Executor
from typing import Dict, Iterable, Sequence, Tuple

import numpy as np

from ferret.models import Document, ScoreKey

LOGGER = logging.getLogger(__name__)


def _distinct_tokens(document: Document) -> Iterable[str]:
    return document.tokens.keys()


def document_frequencies(
    documents: Sequence[Document], executor: Executor | None = None
) -> Dict[str, int]:
    """Count, for every token, the number of documents containing it."""
    df: Counter = Counter()
    mapper = executor.map if executor is not None else map
    for tokens in mapper(_distinct_tokens, documents):
        df.update(tokens)
    return dict(df)


def inverse_document_frequencies(df: Dict[str, int], n: int) -> Dict[str, float]:
    if n == 0 or not df:
        return {}
    tokens = list(df)
    counts = np.fromiter((df[token] for token in tokens), dtype=np.float64, count=len(tokens))
    weights = np.log(n / counts)
    return {token: float(weight) for token, weight in zip(tokens, weights)}


def document_scores(document: Document, idf: Dict[str, float]) -> Dict[ScoreKey, float]:
    """TF-IDF score of every token of ``document``, keyed by ``(id, token)``."""
    if not document.tokens:
        return {}
    tokens = list(document.tokens)
    counts = np.fromiter(
        (document.tokens[token] for token in tokens), dtype=np.float64, count=len(tokens)
    )
    weights = np.fromiter((idf[token] for token in tokens), dtype=np.float64, count=len(tokens))
    scores = (counts / counts.sum()) * weights
    return {(document.id, token): float(score) for token, score in zip(tokens, scores)}


def aggregate(
    documents: Sequence[Document], executor: Executor | None = None
) -> Tuple[Dict[ScoreKey, float], Dict[str, float]]:
    """Compute ``(scores, vocabulary)`` for a corpus.

    Document frequencies are fully counted before any score is computed. With
    an ``executor`` both phases fan out across documents.
    """
    n = len(documents)
    if n == 0:
        return {}, {}

    df = document_frequencies(documents, executor)
    vocabulary = inverse_document_frequencies(df, n)
    LOGGER.debug("Vocabulary of %d tokens over %d documents", len(vocabulary), n)

    if executor is not None:
        partials: Iterable[Dict[ScoreKey, float]] = executor.map(
            document_scores, documents, [vocabulary] * n
        )
    else:
        partials = (document_scores(document, vocabulary) for document in documents)

    scores: Dict[ScoreKey, float] = {}
    for partial in partials:
        scores.update(partial)
    return scores, vocabulary

