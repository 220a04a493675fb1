# chatbot_config.py
# Central configuration for SmartHelp AI. Values come from the environment
# (optionally a .env file next to this module) and can be overridden on the
# command line by chatbot_app.
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).parent / ".env")

# -------------------------
# Storage
# -------------------------
FAQ_FILE = os.getenv("SMARTHELP_FAQ_FILE", "faqs.tsv")

# -------------------------
# Retrieval
# -------------------------
SIM_THRESHOLD = float(os.getenv("SMARTHELP_SIM_THRESHOLD", "0.22"))  # tune threshold
DEFAULT_IDF = 1.0  # weight for query words the corpus has never seen

# Append "(matched via FAQ, sim=...)" to FAQ answers
SHOW_MATCH_SCORE = os.getenv("SMARTHELP_SHOW_MATCH_SCORE", "false").lower() == "true"

# -------------------------
# Logging
# -------------------------
LOG_LEVEL = os.getenv("SMARTHELP_LOG_LEVEL", "WARNING").upper()
