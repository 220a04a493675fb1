# chatbot_engine.py
# Hybrid response engine: quick rules -> TF-IDF FAQ retrieval -> sentiment-aware fallback.
import logging
import threading
from typing import Callable, Iterable, List, NamedTuple, Optional, Tuple

from chatbot_config import SIM_THRESHOLD
from chatbot_nlp import FaqIndex, Tokenizer, build_index, cosine, vectorize_query
from chatbot_rules import Mood, RuleEngine, SentimentHeuristic

logger = logging.getLogger(__name__)

FaqEntry = Tuple[str, str]  # (question, answer)

APOLOGY_TEXT = (
    "I'm sorry this is frustrating. Could you rephrase your question or give me a bit more detail? "
    "I can also learn it: type '/add' to teach me."
)
NOT_SURE_TEXT = "I'm not sure yet 🤔. Try rephrasing, or use '/add' to teach me the answer for next time!"


class Reply(NamedTuple):
    text: str
    source: str  # "rule", "faq" or "fallback"
    score: Optional[float] = None
    clear_transcript: bool = False


class _Snapshot(NamedTuple):
    entries: Tuple[FaqEntry, ...]
    index: FaqIndex


def _clean(value: str) -> str:
    # no record-terminating characters may reach the persister
    return " ".join(value.splitlines()).strip()


class FaqEngine:
    """
    Answers questions from a small, teachable FAQ corpus.

    The corpus and its TF-IDF index are held together in one immutable
    snapshot. add_entry builds a fresh index and swaps the whole snapshot,
    so a reader always sees entries and vectors from the same state.
    """

    def __init__(
        self,
        entries: Iterable[FaqEntry] = (),
        tokenizer: Optional[Tokenizer] = None,
        rules: Optional[RuleEngine] = None,
        sentiment: Optional[SentimentHeuristic] = None,
        threshold: float = SIM_THRESHOLD,
        persister: Optional[Callable[[List[FaqEntry]], object]] = None,
    ):
        self.tokenizer = tokenizer or Tokenizer()
        self.rules = rules or RuleEngine()
        self.sentiment = sentiment or SentimentHeuristic()
        self.threshold = threshold
        self.persister = persister
        self._lock = threading.Lock()
        self._snapshot = self._build(tuple((q, a) for q, a in entries))

    def _build(self, entries: Tuple[FaqEntry, ...]) -> _Snapshot:
        return _Snapshot(entries, build_index([q for q, _ in entries], self.tokenizer))

    @property
    def index(self) -> FaqIndex:
        return self._snapshot.index

    def __len__(self) -> int:
        return len(self._snapshot.entries)

    # -------------------------
    # Ask -> answer
    # -------------------------
    def best_match(self, utterance: str, snapshot: Optional[_Snapshot] = None) -> Tuple[int, float]:
        """Index and score of the closest FAQ question; (-1, -1.0) when the corpus is empty."""
        snap = snapshot or self._snapshot
        q_vec = vectorize_query(utterance, snap.index, self.tokenizer)
        best_i, best_sim = -1, -1.0
        for i, doc_vec in enumerate(snap.index.doc_vectors):
            sim = cosine(q_vec, doc_vec)
            # strict ">" keeps the earliest entry on ties
            if sim > best_sim:
                best_i, best_sim = i, sim
        return best_i, best_sim

    def reply(self, utterance: str) -> Reply:
        snap = self._snapshot
        quick = self.rules.match(utterance, faq_count=len(snap.entries))
        if quick is not None:
            return Reply(quick.text, "rule", clear_transcript=quick.clear_transcript)

        best_i, best_sim = self.best_match(utterance, snap)
        if best_sim >= self.threshold:
            logger.debug("FAQ #%d matched with sim=%.3f", best_i + 1, best_sim)
            return Reply(snap.entries[best_i][1], "faq", best_sim)

        logger.debug("No FAQ above threshold %.2f (best sim=%.3f)", self.threshold, best_sim)
        if self.sentiment(utterance) is Mood.NEGATIVE:
            return Reply(APOLOGY_TEXT, "fallback", best_sim)
        return Reply(NOT_SURE_TEXT, "fallback", best_sim)

    @staticmethod
    def render(r: Reply, diagnostics: bool = False) -> str:
        if diagnostics and r.source == "faq":
            return f"{r.text} (matched via FAQ, sim={r.score:.2f})"
        return r.text

    def respond(self, utterance: str, diagnostics: bool = False) -> str:
        return self.render(self.reply(utterance), diagnostics)

    # -------------------------
    # Teaching & listing
    # -------------------------
    def add_entry(self, question: str, answer: str) -> bool:
        """Learn a new FAQ. Blank question or answer is rejected and changes nothing."""
        q, a = _clean(question or ""), _clean(answer or "")
        if not q or not a:
            logger.warning("Rejected FAQ with blank question or answer")
            return False

        with self._lock:
            snap = self._build(self._snapshot.entries + ((q, a),))
            self._snapshot = snap
            logger.info("Learned new FAQ #%d: %s", len(snap.entries), q)
            if self.persister is not None:
                self.persister(list(snap.entries))
        return True

    def list_entries(self) -> List[Tuple[int, str, str]]:
        return [(i, q, a) for i, (q, a) in enumerate(self._snapshot.entries, 1)]
