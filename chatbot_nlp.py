# chatbot_nlp.py
# Text pipeline behind SmartHelp AI: tokenization, TF-IDF index over the FAQ
# questions and sparse cosine similarity.
import logging
import math
import re
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from chatbot_config import DEFAULT_IDF

logger = logging.getLogger(__name__)

Vector = Mapping[str, float]

# -------------------------
# 1) Tokenization
# -------------------------
DEFAULT_STOPWORDS = frozenset([
    "a", "an", "the", "and", "or", "but", "if", "then", "else", "when", "at", "by", "for", "with",
    "about", "against", "between", "into", "through", "during", "before", "after", "above", "below",
    "to", "from", "up", "down", "in", "out", "on", "off", "over", "under", "again", "further", "here",
    "there", "why", "how", "all", "any", "both", "each", "few", "more", "most", "other", "some", "such",
    "no", "nor", "not", "only", "own", "same", "so", "than", "too", "very", "can", "will", "just", "is",
    "am", "are", "was", "were", "be", "been", "being", "do", "does", "did", "doing", "of",
])

NON_WORD = re.compile(r"[^a-z0-9\s]")


class Tokenizer:
    """Lowercase, turn punctuation into spaces, split, drop stopwords.

    Token order and duplicates are kept; term frequency depends on both.
    """

    def __init__(self, stopwords: Iterable[str] = DEFAULT_STOPWORDS):
        self.stopwords = frozenset(stopwords)

    def __call__(self, text: str) -> List[str]:
        return self.tokenize(text)

    def tokenize(self, text: str) -> List[str]:
        if not text:
            return []
        normalized = NON_WORD.sub(" ", text.lower())
        return [tok for tok in normalized.split() if tok not in self.stopwords]


_default_tokenizer = Tokenizer()


def tokenize(text: str) -> List[str]:
    return _default_tokenizer.tokenize(text)


# -------------------------
# 2) TF-IDF index
# -------------------------
def term_frequency(tokens: Sequence[str]) -> Dict[str, float]:
    """Raw counts divided by the count of the most frequent token."""
    counts = Counter(tokens)
    if not counts:
        return {}
    peak = max(counts.values())
    return {tok: n / peak for tok, n in counts.items()}


@dataclass(frozen=True)
class FaqIndex:
    """TF-IDF view of the FAQ questions. Built whole, never patched."""
    vocabulary: FrozenSet[str] = frozenset()
    doc_freq: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    idf: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    doc_vectors: Tuple[Vector, ...] = ()

    def weight(self, term: str) -> float:
        return self.idf.get(term, DEFAULT_IDF)

    def __len__(self) -> int:
        return len(self.doc_vectors)


def _pretokenized(doc):
    return doc


def build_index(questions: Sequence[str], tokenizer: Optional[Tokenizer] = None) -> FaqIndex:
    """
    Steps:
    1. Tokenize every question (answers never contribute terms)
    2. Count terms per question with CountVectorizer
    3. df = number of questions containing the term, N = max(1, #questions)
    4. idf = ln((N + 1) / (df + 1)) + 1
    5. Document vector = (count / max count in that question) * idf
    """
    tokenizer = tokenizer or _default_tokenizer
    docs = [tokenizer(q) for q in questions]

    if not any(docs):
        # CountVectorizer refuses an empty vocabulary
        logger.info("Rebuilt TF-IDF index: %d FAQs, vocab size=0", len(docs))
        return FaqIndex(doc_vectors=tuple(MappingProxyType({}) for _ in docs))

    vectorizer = CountVectorizer(analyzer=_pretokenized)
    counts = vectorizer.fit_transform(docs).tocsr()
    terms = [str(t) for t in vectorizer.get_feature_names_out()]

    n_docs = max(1, len(docs))
    df = np.asarray((counts > 0).sum(axis=0)).ravel()
    idf = np.log((n_docs + 1.0) / (df + 1.0)) + 1.0

    vectors = []
    for row in range(counts.shape[0]):
        start, end = counts.indptr[row], counts.indptr[row + 1]
        cols = counts.indices[start:end]
        raw = counts.data[start:end]
        if raw.size == 0:
            vectors.append(MappingProxyType({}))
            continue
        tf = raw / raw.max()
        vectors.append(MappingProxyType({terms[c]: float(w * idf[c]) for c, w in zip(cols, tf)}))

    index = FaqIndex(
        vocabulary=frozenset(terms),
        doc_freq=MappingProxyType({t: int(d) for t, d in zip(terms, df)}),
        idf=MappingProxyType({t: float(w) for t, w in zip(terms, idf)}),
        doc_vectors=tuple(vectors),
    )
    logger.info("Rebuilt TF-IDF index: %d FAQs, vocab size=%d", len(docs), len(terms))
    return index


def vectorize_query(text: str, index: FaqIndex, tokenizer: Optional[Tokenizer] = None) -> Dict[str, float]:
    """Query vector in the index's space; unseen words keep the default weight."""
    tokenizer = tokenizer or _default_tokenizer
    tf = term_frequency(tokenizer(text))
    return {tok: w * index.weight(tok) for tok, w in tf.items()}


# -------------------------
# 3) Similarity
# -------------------------
def cosine(v1: Vector, v2: Vector) -> float:
    # iterate over the smaller vector
    small, large = (v1, v2) if len(v1) < len(v2) else (v2, v1)
    dot = 0.0
    for term, w in small.items():
        other = large.get(term)
        if other is not None:
            dot += w * other

    n1 = sum(w * w for w in v1.values())
    n2 = sum(w * w for w in v2.values())
    if n1 == 0 or n2 == 0:
        return 0.0
    return dot / (math.sqrt(n1) * math.sqrt(n2))
