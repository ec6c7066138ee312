# config.py
import os

# Server config (local only)
HOST = "127.0.0.1"
PORT = 8000

# Model files: the JSON model wins, the corpus is a fallback that gets counted at startup
MODEL_FILE = os.environ.get("KURMANJI_MODEL_FILE", "data/kurmanji_model_optimized.json")
CORPUS_FILE = os.environ.get("KURMANJI_CORPUS_FILE", "data/corpus.txt")

# N-gram backoff config
MAX_ORDER = 5
MIN_ORDER = 2
CONTEXT_SEPARATOR = " "      # joins history tokens into a context key
BACKOFF_CANDIDATE_LIMIT = 5  # stop backing off once more than this many candidates are collected
MAX_SUGGESTIONS = 3          # suggestions returned to client

# Autocorrect config
MIN_CORRECTION_LENGTH = 3    # shorter words are never corrected
LENGTH_WINDOW = 2            # candidate length must be within +/- this of the typed word
MAX_CORRECTION_DISTANCE = 2.0
LONG_WORD_LENGTH = 5
LONG_WORD_THRESHOLD = 2.0    # confidence threshold for words >= LONG_WORD_LENGTH
SHORT_WORD_THRESHOLD = 1.5
ADJACENT_SUBSTITUTION_COST = 0.5
