"""
Lenient term overlap used for skills match and values alignment.

A user term matches when it contains, or is contained in, any template term
(case-insensitive). "Design" therefore matches "UX design" and "designing".
"""

from typing import Callable, Iterable, List

from ...models.scoring import NEUTRAL_SCORE


def normalize_terms(terms: Iterable[str]) -> List[str]:
    """Lowercase and strip; blank entries are dropped so "" never matches everything."""
    return [t.strip().lower() for t in terms or [] if t and t.strip()]


def lenient_match(user_term: str, template_terms: List[str]) -> bool:
    return any(user_term in t or t in user_term for t in template_terms)


def overlap_score(
    user_terms: Iterable[str],
    template_terms: Iterable[str],
    matcher: Callable[[str, List[str]], bool] = lenient_match,
) -> float:
    """
    Fraction of user terms that match any template term, capped at 1.

    Returns NEUTRAL_SCORE when the template lists no terms (no data is not a
    mismatch), and 0 when the user lists none.
    """
    template_norm = normalize_terms(template_terms)
    if not template_norm:
        return NEUTRAL_SCORE
    user_norm = normalize_terms(user_terms)
    if not user_norm:
        return 0.0
    matches = sum(1 for term in user_norm if matcher(term, template_norm))
    return min(matches / len(user_norm), 1.0)
