"""Branch name derivation for new features.

A free-text feature description is reduced to a short, hyphenated
identifier that is safe to use both as a git branch name and as a
directory name under the specs root.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .config import MAX_BRANCH_BYTES
from .exceptions import InvalidBranchNameError

logger = logging.getLogger("speckfeature.naming")

STOP_WORDS = frozenset(
    {
        "i", "a", "an", "the", "to", "for", "of", "in", "on", "at", "by", "with", "from",
        "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "do", "does", "did",
        "will", "would", "should", "could", "can", "may", "might", "must", "shall",
        "this", "that", "these", "those",
        "my", "your", "our", "their",
        "want", "need", "add", "get", "set",
    }
)

MIN_WORD_LENGTH = 3
DEFAULT_WORD_LIMIT = 3
FALLBACK_SEGMENTS = 3

_NON_WORD_CHARS = re.compile(r"[^a-z0-9\s]")
_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9]")
_HYPHEN_RUNS = re.compile(r"-+")


def sanitize(raw: str) -> str:
    """Normalize ``raw`` into lowercase alphanumerics joined by single hyphens."""
    cleaned = _NON_TOKEN_CHARS.sub("-", raw.lower())
    cleaned = _HYPHEN_RUNS.sub("-", cleaned)
    return cleaned.strip("-")


def extract_words(description: str) -> List[str]:
    """Split a description into lowercase alphanumeric words."""
    return _NON_WORD_CHARS.sub(" ", description.lower()).split()


def _is_acronym(word: str, description: str) -> bool:
    pattern = r"\b" + re.escape(word.upper()) + r"\b"
    return re.search(pattern, description) is not None


def meaningful_words(description: str) -> List[str]:
    """Return the words of ``description`` that carry meaning for a branch name.

    Stop words are dropped. Words shorter than three characters survive
    only when they appear fully uppercased in the original text, so
    acronyms such as ``AI`` or ``UI`` are kept.
    """
    kept: List[str] = []
    for word in extract_words(description):
        if word in STOP_WORDS:
            continue
        if len(word) >= MIN_WORD_LENGTH or _is_acronym(word, description):
            kept.append(word)
    return kept


def derive_branch_name(description: str) -> str:
    """Derive a candidate branch name from a feature description.

    Exactly four meaningful words are kept whole; any other count is
    capped at the first three. When no meaningful word survives, the
    first three segments of the sanitized description are used instead.
    The result is always passed through :func:`sanitize`; length
    clamping is left to :func:`clamp_branch_name`.
    """
    words = meaningful_words(description)
    if words:
        limit = 4 if len(words) == 4 else DEFAULT_WORD_LIMIT
        candidate = "-".join(words[:limit])
    else:
        segments = [segment for segment in sanitize(description).split("-") if segment]
        candidate = "-".join(segments[:FALLBACK_SEGMENTS])
    return sanitize(candidate)


def clamp_branch_name(name: str, max_bytes: int = MAX_BRANCH_BYTES) -> Tuple[str, Optional[str]]:
    """Truncate ``name`` to at most ``max_bytes`` UTF-8 bytes.

    Returns the (possibly truncated) name and a warning message when
    truncation happened, otherwise ``None``.
    """
    encoded = name.encode("utf-8")
    if len(encoded) <= max_bytes:
        return name, None

    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")
    if truncated.endswith("-"):
        truncated = truncated[:-1]

    message = (
        f"Branch name exceeded {max_bytes}-byte limit. "
        f"Original: {name} ({len(encoded)} bytes). "
        f"Truncated to: {truncated} ({len(truncated.encode('utf-8'))} bytes)"
    )
    logger.warning(message)
    return truncated, message


def resolve_branch_name(
    description: str,
    short_name: Optional[str] = None,
    *,
    max_bytes: int = MAX_BRANCH_BYTES,
) -> Tuple[str, Optional[str]]:
    """Produce the final candidate branch name from a description or an override.

    Raises :class:`InvalidBranchNameError` when nothing usable remains
    after sanitization.
    """
    if short_name:
        source = short_name
        candidate = sanitize(short_name)
        logger.debug(f"Using explicit short name '{short_name}' -> '{candidate}'")
    else:
        source = description
        candidate = derive_branch_name(description)
        logger.debug(f"Derived branch name '{candidate}' from description")

    if not candidate:
        raise InvalidBranchNameError(source)

    return clamp_branch_name(candidate, max_bytes)
