import os

MAX_BODY_BYTES = 1 * 1024 * 1024  # 1 MB soft cap on request bodies
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Closed bounds for every category score and the overall score
SCORE_MIN = 30
SCORE_MAX = 95
NEUTRAL_SCORE = 70

# Segmentation / alignment
ALIGNMENT_THRESHOLD = 0.4  # Jaccard similarity a corrected segment must exceed
ALIGNMENT_STRATEGY = "independent"  # or "greedy"

# Change detection
MAX_ISSUES_PER_BLOCK = 5
TOKENS_PER_ISSUE = 15
PHRASE_WINDOW = 3
PHRASE_MIN_DISTANCE = 2   # phrase edits must exceed this edit distance
TOKEN_MIN_DISTANCE = 1    # single-token edits must exceed this edit distance
RESTRUCTURE_RATIO = 0.10  # whole-block distance / length that flags a rewrite

# Metrics
MIN_EFFECTIVE_LENGTH = 100
BASELINE_FLOOR = 50
ISSUE_BASELINE_PENALTY = 5
JITTER = 1.5

# Deduction points per (issue per 1000 characters), deduction cap,
# penalty when the error analysis names the category, bonus when the
# assessment praises it.
METRIC_RULES = {
    "grammar":    {"weight": 0.30, "cap": 35, "penalty": 15, "bonus": 5},
    "clarity":    {"weight": 0.40, "cap": 35, "penalty": 12, "bonus": 8},
    "vocabulary": {"weight": 0.25, "cap": 30, "penalty": 10, "bonus": 8},
    "style":      {"weight": 0.20, "cap": 30, "penalty": 10, "bonus": 5},
}

READABILITY_WEIGHTS = {"grammar": 0.25, "clarity": 0.30, "punctuation": 0.10}
READABILITY_CAP = 30

VARIETY_MIN_SENTENCES = 3
VARIETY_LOW_SCORE = 50
VARIETY_STDEV_RANGE = (15, 30)  # characters
VARIETY_STDEV_LOW = 10
VARIETY_STDEV_HIGH = 40

# Overall score weighting, must sum to 1.0
WEIGHTS = {
    "grammar": 0.25,
    "clarity": 0.25,
    "readability": 0.20,
    "vocabulary": 0.15,
    "style": 0.15,
}
GRAMMAR_PENALTY_MAX = 15
CLARITY_PENALTY_MAX = 10
LOW_SCORE_THRESHOLD = 50

# External band estimate (1-9) blending
BAND_MIN = 1.0
BAND_MAX = 9.0
BAND_WEIGHT = 0.8

FALLBACK_NARRATIVE = (
    "Detailed feedback is temporarily unavailable. The scores shown are "
    "estimates based on a local analysis of your text."
)
