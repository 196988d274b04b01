"""TF-IDF cosine-similarity search over page titles.

The vector space is rebuilt on every call from the pages passed in, so
results always reflect the current input. ``TfidfIndex`` is the transient
index for one query and is not meant to be kept around.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from browsing_signals.activity.models import PageEvent
from browsing_signals.config import SearchConfig
from browsing_signals.search.models import SemanticMatchResult
from browsing_signals.search.tokenizer import tokenize

logger = logging.getLogger(__name__)


def _normalize(vector: dict[int, float]) -> dict[int, float]:
    norm = math.sqrt(sum(v * v for v in vector.values())) or 1.0
    return {idx: v / norm for idx, v in vector.items()}


def _dot(query: dict[int, float], doc: dict[int, float]) -> float:
    if len(doc) < len(query):
        query, doc = doc, query
    return sum(v * doc.get(idx, 0.0) for idx, v in query.items())


class TfidfIndex:
    """Vocabulary, smoothed IDF weights and L2-normalized document vectors.

    Vectors are sparse: each maps a vocabulary index to its weight and
    holds only the terms present in that text.

    Args:
        documents: Texts to index; vocabulary indices follow first-seen order.
    """

    def __init__(self, documents: Sequence[str]):
        tokenized = [tokenize(doc) for doc in documents]

        self.vocabulary: dict[str, int] = {}
        for tokens in tokenized:
            for token in tokens:
                if token not in self.vocabulary:
                    self.vocabulary[token] = len(self.vocabulary)

        doc_freq = [0] * len(self.vocabulary)
        for tokens in tokenized:
            for token in set(tokens):
                doc_freq[self.vocabulary[token]] += 1

        n = len(documents)
        # +1 smoothing keeps every weight positive, even for terms in all documents.
        self.idf = [math.log((n + 1) / (df + 1)) + 1 for df in doc_freq]
        self.doc_vectors = [_normalize(self._weigh(tokens)) for tokens in tokenized]

    def _weigh(self, tokens: list[str]) -> dict[int, float]:
        tf: dict[int, int] = {}
        for token in tokens:
            idx = self.vocabulary.get(token)
            if idx is not None:
                tf[idx] = tf.get(idx, 0) + 1
        max_tf = max(tf.values(), default=0) or 1
        return {idx: (count / max_tf) * self.idf[idx] for idx, count in tf.items()}

    def vectorize(self, text: str) -> dict[int, float]:
        """Normalized TF-IDF vector for ``text``; unknown terms contribute nothing."""
        return _normalize(self._weigh(tokenize(text)))

    def similarities(self, text: str) -> list[float]:
        """Cosine similarity of ``text`` against every indexed document, in order."""
        query_vector = self.vectorize(text)
        return [_dot(query_vector, doc) for doc in self.doc_vectors]


def search_semantic(
    query: str,
    pages: Sequence[PageEvent],
    min_score: float | None = None,
) -> list[SemanticMatchResult]:
    """Rank pages by TF-IDF cosine similarity between query and title.

    Pages scoring below ``min_score`` (default 0.1) are dropped.
    """
    if min_score is None:
        min_score = SearchConfig().min_score
    if not (query or "").strip() or not pages:
        return []

    index = TfidfIndex([p.title for p in pages])
    logger.debug(
        "Semantic search over %d pages, vocabulary size %d",
        len(pages), len(index.vocabulary),
    )

    results = [
        SemanticMatchResult(page_event=page, score=score)
        for page, score in zip(pages, index.similarities(query))
        if score >= min_score
    ]
    results.sort(key=lambda r: r.score, reverse=True)
    return results
