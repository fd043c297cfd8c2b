from typing import Iterable, List

from sqlalchemy import JSON, String, cast, or_


def search_terms(query: str | None) -> List[str]:
    if not query:
        return []
    return [t for t in query.split() if t]


def _has_word_char(term: str) -> bool:
    return any(ch.isalnum() for ch in term)


def build_search_filter(query: str | None, columns: Iterable):
    """
    OR-matched multi-field search.

    A row matches when any whitespace-separated term of ``query`` occurs,
    case-insensitively, in any of ``columns``. JSON columns (tags) are
    matched against their serialized text, skipping terms without a letter
    or digit since those would only hit the JSON punctuation. Returns
    ``None`` for an empty query so callers can skip the filter.
    """
    terms = search_terms(query)
    if not terms:
        return None

    exprs = []
    for col in columns:
        if isinstance(col.type, JSON):
            target, col_terms = cast(col, String), [t for t in terms if _has_word_char(t)]
        else:
            target, col_terms = col, terms
        for term in col_terms:
            exprs.append(target.icontains(term, autoescape=True))
    return or_(*exprs)


def normalize_tags(tags) -> List[str]:
    """Trim and lower-case tags, dropping blanks and duplicates (order kept)."""
    if not tags:
        return []
    seen = []
    for tag in tags:
        if tag is None:
            continue
        t = str(tag).strip().lower()
        if t and t not in seen:
            seen.append(t)
    return seen
