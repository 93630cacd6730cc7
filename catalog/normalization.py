# catalog/normalization.py
import hashlib
import re
from typing import Optional

# Letters folded to their base form before comparison
LETTER_FOLDS = {
    "ё": "е",
}

# Words naming the physical publication rather than the work itself
NOISE_WORDS = ["изд", "издание", "баспасы", "publ", "publishing"]

_NON_WORD_PATTERN = re.compile(r"[\W_]+")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_NOISE_PATTERN = re.compile(r"\b(?:" + "|".join(NOISE_WORDS) + r")\b")


def normalize_text(text: Optional[str]) -> str:
    """Return the canonical form of a catalog string.

    Lowercases, folds letter variants, replaces punctuation with spaces,
    collapses whitespace and drops noise words. Never raises; ``None`` and
    all-punctuation input both give an empty string.

    Example:
        >>> normalize_text("Толстой, Лев (изд. 2-е)")
        'толстой лев 2 е'
    """
    if not text:
        return ""

    normalized = text.lower()
    for variant, base in LETTER_FOLDS.items():
        normalized = normalized.replace(variant, base)

    normalized = _NON_WORD_PATTERN.sub(" ", normalized)
    normalized = _NOISE_PATTERN.sub(" ", normalized)
    return _WHITESPACE_PATTERN.sub(" ", normalized).strip()


def generate_work_key(author: Optional[str], title: Optional[str]) -> str:
    """Fingerprint of (author, title) shared by all editions of one work.

    Editions whose author and title are both empty all collapse into the
    key of ``"|"``.
    """
    combined = f"{normalize_text(author)}|{normalize_text(title)}"
    return hashlib.md5(combined.encode("utf-8")).hexdigest()
