"""
Keyword-overlap matcher for the FAQ knowledge base.

Scores every entry against the query by counting shared tokens in the
question, the answer and the tags, then keeps the confident matches and
flags the response as ambiguous when the near-top matches span more than
one topic.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Sequence

from config.settings import MatchingConfig
from models.faq import AskResponse, FaqEntry, FaqResult

DEFAULT_MATCHING = MatchingConfig()

# ASCII word characters only: accented letters split words like punctuation.
_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)


@dataclass(frozen=True)
class ScoredCandidate:
    """An entry paired with its score for one ranking pass."""

    entry: FaqEntry
    score: float


def tokenize(text: str, min_length: int = DEFAULT_MATCHING.min_token_length) -> List[str]:
    """Lowercase, turn punctuation into spaces and drop short words."""
    cleaned = _NON_WORD.sub(" ", (text or "").lower())
    return [word for word in cleaned.split() if len(word) >= min_length]


def overlap(left: Iterable[str], right: Iterable[str]) -> int:
    """Number of distinct tokens present on both sides."""
    return len(set(left) & set(right))


def score_entry(
    query: str, entry: FaqEntry, config: MatchingConfig = DEFAULT_MATCHING
) -> float:
    """Weighted overlap score in [0, 1]."""
    query_tokens = tokenize(query, config.min_token_length)
    divisor = max(len(query_tokens), 1)

    question_overlap = overlap(query_tokens, tokenize(entry.question, config.min_token_length))
    answer_overlap = overlap(query_tokens, tokenize(entry.answer, config.min_token_length))

    tag_overlap_sum = sum(
        overlap(query_tokens, tokenize(tag, config.min_token_length)) for tag in entry.tags
    )
    tag_overlap = tag_overlap_sum / max(len(entry.tags), 1)

    keyword_score = (
        question_overlap * config.question_weight + answer_overlap * config.answer_weight
    ) / divisor
    tag_score = tag_overlap * config.tag_weight

    return min(keyword_score + tag_score, 1.0)


def round_score(score: float) -> float:
    """Two decimals, halves rounded away from zero."""
    return float(Decimal(str(score)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def fallback_response(config: MatchingConfig = DEFAULT_MATCHING) -> AskResponse:
    return AskResponse(results=[], message=config.fallback_message)


def _project(candidate: ScoredCandidate) -> FaqResult:
    entry = candidate.entry
    return FaqResult(
        id=entry.id,
        question=entry.question,
        answer=entry.answer,
        tags=list(entry.tags),
        score=round_score(candidate.score),
    )


def rank_candidates(
    candidates: Sequence[ScoredCandidate], config: MatchingConfig = DEFAULT_MATCHING
) -> AskResponse:
    """
    Filter, order and cap scored candidates.

    Ties are broken by ascending entry id so the output never depends on the
    order the store returned rows in.
    """
    confident = [c for c in candidates if c.score >= config.confidence_threshold]
    if not confident:
        return fallback_response(config)

    confident.sort(key=lambda c: (-c.score, c.entry.id))

    top_score = confident[0].score
    close_matches = [c for c in confident if c.score >= top_score * config.ambiguity_ratio]
    topics = {tag for c in close_matches for tag in c.entry.tags}
    ambiguous = len(topics) > 1 and len(close_matches) > 1

    selected = close_matches if ambiguous else confident[: config.max_results]
    return AskResponse(
        results=[_project(c) for c in selected],
        ambiguous=True if ambiguous else None,
    )
