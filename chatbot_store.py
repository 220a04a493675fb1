# chatbot_store.py
# Plain two-column TSV storage for the FAQ corpus (question<TAB>answer per line).
import logging
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

FaqEntry = Tuple[str, str]

SEED_FAQS: List[FaqEntry] = [
    ("what is your purpose",
     "I answer common questions and learn FAQs you add in the app."),
    ("how do i add a new faq",
     "Type '/add', enter a question and answer, and I'll remember it."),
    ("how to clear the chat",
     "Type 'clear' and press Enter."),
    ("what nlp do you use",
     "I use tokenization, stopword removal, and TF-IDF similarity to find the best matching FAQ."),
]


def _read_faqs(path: Path) -> List[FaqEntry]:
    """Parse the file; raises OSError/UnicodeDecodeError when it cannot be read."""
    lines = pd.Series(path.read_text(encoding="utf-8").split("\n"), dtype=str).str.rstrip("\r")

    # split on the first tab only; later tabs stay in the answer
    parts = lines.str.split("\t", n=1, expand=True).reindex(columns=[0, 1])
    df = parts.rename(columns={0: "question", 1: "answer"}).fillna("")  # no tab -> no answer

    df["question"] = df["question"].str.strip()
    df["answer"] = df["answer"].str.strip()
    df = df[(df["question"] != "") & (df["answer"] != "")]
    return list(df.itertuples(index=False, name=None))


def load_faqs(path) -> List[FaqEntry]:
    """Read question/answer pairs, skipping rows where either side is blank."""
    path = Path(path)
    if not path.exists():
        return []
    try:
        return _read_faqs(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        return []


def save_faqs(entries: Sequence[FaqEntry], path) -> bool:
    """Write all pairs; tabs inside values become spaces. Returns False on I/O failure."""
    df = pd.DataFrame(list(entries), columns=["question", "answer"], dtype=str)
    for col in ("question", "answer"):
        df[col] = df[col].str.replace("\t", " ", regex=False).str.strip()
    lines = df["question"] + "\t" + df["answer"]
    try:
        Path(path).write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        return False
    return True


def load_or_seed(path) -> List[FaqEntry]:
    """
    Load the corpus. A missing or empty file gets the seed FAQs written to it;
    a file that exists but cannot be read is left untouched and nothing is loaded.
    """
    path = Path(path)
    if path.exists():
        try:
            faqs = _read_faqs(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s, not seeding over it: %s", path, e)
            return []
        if faqs:
            return faqs

    faqs = list(SEED_FAQS)
    save_faqs(faqs, path)
    logger.info("Seeded %d default FAQs into %s", len(faqs), path)
    return faqs


def make_persister(path) -> Callable[[Sequence[FaqEntry]], bool]:
    def persist(entries: Sequence[FaqEntry]) -> bool:
        return save_faqs(entries, path)
    return persist
