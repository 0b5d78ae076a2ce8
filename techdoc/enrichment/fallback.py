"""Deterministic local summary/tags used whenever the AI provider is unavailable."""

from techdoc.enrichment.models import EnrichmentResult, EnrichmentSource
from techdoc.logging.logger import Log

SUMMARY_WORD_LIMIT = 50
FALLBACK_TAG_LIMIT = 5
MIN_TAG_LENGTH = 4

CONSTANT_SUMMARY = "Документ содержит текстовую информацию"
CONSTANT_TAGS = ("документ", "текст")

STOP_WORDS = frozenset({
    # Russian
    "и", "в", "на", "с", "по", "для", "от", "до", "из", "к", "о", "об", "за",
    "при", "про", "через", "под", "над", "между", "или", "если", "чтобы",
    "также", "этот", "эта", "это", "эти", "который", "которая", "которые",
    "быть", "было", "были", "будет", "только", "после", "перед",
    # English
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "this", "that", "these", "those", "from", "into", "have",
    "were", "which", "will", "would", "should", "there", "their", "been",
    "about", "also",
})

_EDGE_PUNCTUATION = "\"'`.,;:!?()[]{}<>«»“”„‘’—–-…/\\|*#"


def build_fallback(text: str) -> EnrichmentResult:
    """Build a summary from the leading words and tags from word frequency.

    Never raises; degrades to a constant pair if construction itself fails.
    """
    try:
        words = text.split()
        return EnrichmentResult(
            summary=_leading_summary(words),
            tags=_frequent_tags(words),
            source=EnrichmentSource.FALLBACK,
        )
    except Exception as exc:
        Log.error(f"Fallback enrichment failed, using constant summary: {exc}")
        return EnrichmentResult(
            summary=CONSTANT_SUMMARY,
            tags=list(CONSTANT_TAGS),
            source=EnrichmentSource.FALLBACK,
        )


def _leading_summary(words: list[str]) -> str:
    summary = " ".join(words[:SUMMARY_WORD_LIMIT])
    if len(words) > SUMMARY_WORD_LIMIT:
        summary += "..."
    return summary


def _frequent_tags(words: list[str]) -> list[str]:
    counts: dict[str, int] = {}
    first_seen: dict[str, int] = {}
    for position, word in enumerate(words):
        token = word.strip(_EDGE_PUNCTUATION).lower()
        if len(token) < MIN_TAG_LENGTH or token in STOP_WORDS:
            continue
        counts[token] = counts.get(token, 0) + 1
        first_seen.setdefault(token, position)

    ranked = sorted(counts, key=lambda token: (-counts[token], first_seen[token]))
    return ranked[:FALLBACK_TAG_LIMIT]
