# chatbot_rules.py
# Canned replies that short-circuit retrieval, and the keyword mood cue used
# to shape the fallback message.
import logging
import re
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, List, NamedTuple, Optional

logger = logging.getLogger(__name__)

# -------------------------
# 1) Rule-based quick replies
# -------------------------
HELP_TEXT = (
    "You can ask about timings, features, simple how-tos, or FAQs.\n"
    "Commands: 'clear' to clear chat, 'show faqs' to list.\n"
    "Use '/add' to teach me new Q&A."
)
CLEARED_TEXT = "Chat cleared ✅"
GREETING_TEXT = "Hello! How can I help you today?"
FAREWELL_TEXT = "You're welcome! Have a great day 👋"
NAME_TEXT = "I'm SmartHelp AI, a lightweight Python FAQ chatbot. You can train me with '/add'!"
FEATURES_TEXT = (
    "I support real-time chat, FAQ retrieval (TF-IDF), rule-based replies, "
    "and on-the-fly training with persistent storage."
)

GREETING = re.compile(r"(hi|hello|hey|hola|namaste|good (morning|afternoon|evening))\b")
FAREWELL = re.compile(r"(bye|goodbye|see you|thanks|thank you)\b")


class QuickReply(NamedTuple):
    text: str
    rule: str
    clear_transcript: bool = False


class Rule(NamedTuple):
    name: str
    matches: Callable[[str], bool]
    reply: Callable[[int], str]
    clear_transcript: bool = False


def _show_faqs_text(faq_count: int) -> str:
    if faq_count == 0:
        return "No FAQs yet. Add some with '/add'!"
    return f"I know {faq_count} FAQs. Type '/faqs' to see the full list."


class RuleEngine:
    """Ordered pattern checks; the first match wins and retrieval is skipped."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock
        self.rules: List[Rule] = [
            Rule("help", lambda t: t in ("help", "menu"), lambda n: HELP_TEXT),
            Rule("clear", lambda t: t == "clear", lambda n: CLEARED_TEXT, clear_transcript=True),
            Rule("greeting", lambda t: GREETING.match(t) is not None, lambda n: GREETING_TEXT),
            Rule("farewell", lambda t: FAREWELL.match(t) is not None, lambda n: FAREWELL_TEXT),
            Rule("time", lambda t: "time" in t, lambda n: f"Current time: {self.clock():%a %b %d %H:%M:%S %Y}"),
            Rule("name", lambda t: "your name" in t, lambda n: NAME_TEXT),
            Rule("features", lambda t: "what can you do" in t or "features" in t, lambda n: FEATURES_TEXT),
            Rule("show_faqs", lambda t: t == "show faqs", _show_faqs_text),
        ]

    def match(self, text: str, faq_count: int = 0) -> Optional[QuickReply]:
        """Return the first matching rule's reply, or None to fall through to retrieval."""
        t = text.strip().lower()
        for rule in self.rules:
            if rule.matches(t):
                logger.debug("Rule %r matched %r", rule.name, t)
                return QuickReply(rule.reply(faq_count), rule.name, rule.clear_transcript)
        return None


# -------------------------
# 2) Sentiment cue
# -------------------------
NEGATIVE_WORDS = ("bad", "hate", "worst", "angry", "upset", "error", "issue", "problem", "slow", "fail", "not working")
POSITIVE_WORDS = ("good", "great", "love", "awesome", "excellent", "nice", "fast", "thanks", "thank you")


class Mood(str, Enum):
    NEGATIVE = "negative"
    POSITIVE = "positive"
    NEUTRAL = "neutral"


class SentimentHeuristic:
    """Very light keyword sentiment: substring hits, each keyword counted once."""

    def __init__(self, negative: Iterable[str] = NEGATIVE_WORDS, positive: Iterable[str] = POSITIVE_WORDS):
        self.negative = tuple(negative)
        self.positive = tuple(positive)

    def score(self, text: str) -> int:
        tl = text.lower()
        return sum(w in tl for w in self.positive) - sum(w in tl for w in self.negative)

    def __call__(self, text: str) -> Mood:
        score = self.score(text)
        if score < 0:
            return Mood.NEGATIVE
        if score > 0:
            return Mood.POSITIVE
        return Mood.NEUTRAL
