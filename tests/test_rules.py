from datetime import datetime

import pytest

from chatbot_rules import (
    CLEARED_TEXT,
    FAREWELL_TEXT,
    FEATURES_TEXT,
    GREETING_TEXT,
    HELP_TEXT,
    NAME_TEXT,
    Mood,
    RuleEngine,
    SentimentHeuristic,
)

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9)


@pytest.fixture
def rules():
    return RuleEngine(clock=lambda: FIXED_NOW)


@pytest.mark.parametrize("text, expected, rule", [
    ("help", HELP_TEXT, "help"),
    ("  MENU ", HELP_TEXT, "help"),
    ("Hello there", GREETING_TEXT, "greeting"),
    ("good morning!", GREETING_TEXT, "greeting"),
    ("namaste", GREETING_TEXT, "greeting"),
    ("thank you so much", FAREWELL_TEXT, "farewell"),
    ("bye", FAREWELL_TEXT, "farewell"),
    ("what is your name?", NAME_TEXT, "name"),
    ("what can you do", FEATURES_TEXT, "features"),
    ("list your features", FEATURES_TEXT, "features"),
])
def test_rule_replies(rules, text, expected, rule):
    reply = rules.match(text)
    assert reply.text == expected
    assert reply.rule == rule
    assert reply.clear_transcript is False


def test_clear_signals_transcript_reset(rules):
    reply = rules.match("clear")
    assert reply.text == CLEARED_TEXT
    assert reply.clear_transcript is True
    assert rules.match("clear the cache") is None


def test_time_uses_clock(rules):
    assert rules.match("what time is it").text == "Current time: Tue Mar 05 14:07:09 2024"


def test_greeting_needs_word_boundary(rules):
    assert rules.match("history of payments") is None
    assert rules.match("say hello") is None


def test_first_matching_rule_wins(rules):
    # greeting is checked before time and name
    assert rules.match("hi, what time is it").rule == "greeting"
    assert rules.match("thanks for the features").rule == "farewell"


def test_show_faqs_uses_count(rules):
    assert "No FAQs yet" in rules.match("show faqs", faq_count=0).text
    assert rules.match("Show FAQs", faq_count=4).text.startswith("I know 4 FAQs")


def test_no_rule_returns_none(rules):
    assert rules.match("how do i reset my password") is None


def test_sentiment_categories():
    mood = SentimentHeuristic()
    assert mood("this is broken and bad") is Mood.NEGATIVE
    assert mood("the app is great") is Mood.POSITIVE
    assert mood("where is my order") is Mood.NEUTRAL
    # one positive, one negative cancels out
    assert mood("good but slow") is Mood.NEUTRAL


def test_sentiment_substring_and_counted_once():
    mood = SentimentHeuristic()
    assert mood.score("fastest delivery") == 1
    assert mood.score("bad bad bad") == -1
    assert mood.score("printer not working, error again") == -2


def test_sentiment_custom_keywords():
    mood = SentimentHeuristic(negative=["meh"], positive=["yay"])
    assert mood("meh") is Mood.NEGATIVE
    assert mood("bad") is Mood.NEUTRAL
