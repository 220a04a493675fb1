# chatbot_app.py
# Console front-end for SmartHelp AI: load FAQs, then chat.
import argparse
import logging

import chatbot_config as config
from chatbot_engine import FaqEngine
from chatbot_store import load_or_seed, make_persister

BOT = "SmartHelp AI"
WELCOME = (
    "Hi! I'm your AI assistant 🤖.\n"
    "Ask me anything, or teach me new FAQs with '/add'.\n"
    "Type 'help' for tips, '/faqs' to list what I know, 'exit' to quit."
)
EXIT_WORDS = ("exit", "quit")


def format_faq_list(engine):
    rows = engine.list_entries()
    if not rows:
        return "No FAQs available."
    lines = [f"FAQs ({len(rows)})"]
    for pos, q, a in rows:
        lines.append(f"{pos}. Q: {q}\n   A: {a}\n")
    return "\n".join(lines)


def teach(engine, read=None):
    read = read or input
    question = read("Question: ").strip()
    answer = read("Answer: ").strip()
    if not engine.add_entry(question, answer):
        return "Both question and answer are required."
    return f"Learned new FAQ ✅\nQ: {question}\nA: {answer}"


def chat_loop(engine, read=None, write=print, show_score=False):
    """Read-eval loop. Returns the transcript of the current (uncleared) session."""
    read = read or input
    transcript = []

    def bot_say(text):
        transcript.append(f"Bot: {text}")
        write(f"{BOT}: {text}\n")

    bot_say(WELCOME)
    while True:
        try:
            user_input = read("You: ").strip()
        except EOFError:
            break
        if not user_input:
            continue
        if user_input.lower() in EXIT_WORDS:
            write(f"{BOT}: Thank you for chatting with us. Have a nice day!")
            break

        transcript.append(f"You: {user_input}")
        if user_input == "/add":
            bot_say(teach(engine, read))
        elif user_input == "/faqs":
            bot_say(format_faq_list(engine))
        else:
            reply = engine.reply(user_input)
            if reply.clear_transcript:
                transcript.clear()
            bot_say(engine.render(reply, diagnostics=show_score))
    return transcript


def main(argv=None):
    ap = argparse.ArgumentParser(description="SmartHelp AI: FAQ chatbot with TF-IDF retrieval")
    ap.add_argument("--faq-file", default=config.FAQ_FILE)
    ap.add_argument("--show-score", action="store_true", default=config.SHOW_MATCH_SCORE)
    ap.add_argument("--log-level", default=config.LOG_LEVEL)
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    faqs = load_or_seed(args.faq_file)
    engine = FaqEngine(faqs, threshold=config.SIM_THRESHOLD, persister=make_persister(args.faq_file))
    chat_loop(engine, show_score=args.show_score)


if __name__ == "__main__":
    main()
