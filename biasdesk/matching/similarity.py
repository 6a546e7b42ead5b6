"""Headline similarity based on word overlap.

Headlines are reduced to sets of significant words (lowercased, accents
removed, punctuation dropped, short words discarded) and compared with the
overlap coefficient::

    |A & B| / min(|A|, |B|)

Overlap is measured against the shorter headline, so a terse headline whose
words all appear in a longer one scores 1.0. Outlets routinely abbreviate the
same story, and Jaccard would penalise that. The formula is symmetric in its
arguments.
"""

import re
import unicodedata
from functools import lru_cache
from typing import FrozenSet

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def normalize_headline(title: str, min_length: int = 3) -> list:
    """Significant words of a headline, in order."""
    text = unicodedata.normalize("NFD", (title or "").lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = _NON_ALNUM.sub(" ", text)
    return [word for word in text.split() if len(word) >= min_length]


@lru_cache(maxsize=8192)
def headline_tokens(title: str, min_length: int = 3) -> FrozenSet[str]:
    return frozenset(normalize_headline(title, min_length))


def title_similarity(a: str, b: str, min_length: int = 3) -> float:
    """Similarity in [0, 1] between two headlines."""
    words_a = headline_tokens(a or "", min_length)
    words_b = headline_tokens(b or "", min_length)
    if not words_a or not words_b:
        return 0.0
    overlap = len(words_a & words_b)
    return overlap / min(len(words_a), len(words_b))
