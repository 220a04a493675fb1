from chatbot_engine import FaqEngine
from chatbot_store import SEED_FAQS, load_faqs, load_or_seed, make_persister, save_faqs


def test_missing_file_loads_nothing(tmp_path):
    assert load_faqs(tmp_path / "nope.tsv") == []


def test_empty_file_loads_nothing(tmp_path):
    path = tmp_path / "faqs.tsv"
    path.write_text("", encoding="utf-8")
    assert load_faqs(path) == []


def test_load_skips_blank_and_malformed_rows(tmp_path):
    path = tmp_path / "faqs.tsv"
    path.write_text(
        "what is your purpose\tI answer questions.\n"
        "no answer here\n"
        "   \tblank question\n"
        "\n"
        " opening hours \t 9 to 5 \n",
        encoding="utf-8",
    )
    assert load_faqs(path) == [
        ("what is your purpose", "I answer questions."),
        ("opening hours", "9 to 5"),
    ]


def test_load_keeps_later_tabs_in_answer(tmp_path):
    path = tmp_path / "faqs.tsv"
    path.write_text("q1\ta1\textra\nq2\ta2\n", encoding="utf-8")
    assert load_faqs(path) == [("q1", "a1\textra"), ("q2", "a2")]
    save_faqs(load_faqs(path), path)
    assert load_faqs(path) == [("q1", "a1 extra"), ("q2", "a2")]


def test_save_replaces_tabs_and_keeps_order(tmp_path):
    path = tmp_path / "faqs.tsv"
    entries = [("tab\tinside", "answer\twith tab"), ("second", 'say "hi" \\ bye')]
    assert save_faqs(entries, path)
    assert path.read_text(encoding="utf-8").splitlines()[0] == "tab inside\tanswer with tab"
    assert load_faqs(path) == [("tab inside", "answer with tab"), ("second", 'say "hi" \\ bye')]


def test_save_reports_io_failure(tmp_path):
    assert save_faqs([("q", "a")], tmp_path / "missing-dir" / "faqs.tsv") is False


def test_load_or_seed_writes_defaults(tmp_path):
    path = tmp_path / "faqs.tsv"
    assert load_or_seed(path) == SEED_FAQS
    assert load_faqs(path) == SEED_FAQS


def test_load_or_seed_leaves_unreadable_file_alone(tmp_path):
    path = tmp_path / "faqs.tsv"
    path.write_bytes("caf\xe9\tcoffee\n".encode("latin-1"))
    assert load_faqs(path) == []
    assert load_or_seed(path) == []
    assert path.read_bytes() == "caf\xe9\tcoffee\n".encode("latin-1")


def test_load_or_seed_fills_empty_file(tmp_path):
    path = tmp_path / "faqs.tsv"
    path.write_text("\n", encoding="utf-8")
    assert load_or_seed(path) == SEED_FAQS


def test_load_or_seed_keeps_existing(tmp_path):
    path = tmp_path / "faqs.tsv"
    save_faqs([("refund policy", "30 days")], path)
    assert load_or_seed(path) == [("refund policy", "30 days")]


def test_engine_persists_after_teaching(tmp_path):
    path = tmp_path / "faqs.tsv"
    engine = FaqEngine(load_or_seed(path), persister=make_persister(path))
    assert engine.add_entry("Where is the office?", "Main street 1.")
    reloaded = FaqEngine(load_faqs(path))
    assert len(reloaded) == len(SEED_FAQS) + 1
    assert reloaded.respond("Where is the office?") == "Main street 1."
