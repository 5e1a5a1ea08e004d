"""
Explanation generation: three short "why this fits you" bullets per candidate.

Text generation is best effort: errors, timeouts and malformed output all
produce the deterministic fallback for that candidate only. Calls for
different candidates run concurrently (bounded by a semaphore) and results
come back in candidate order.
"""

import asyncio
import logging
import time
from typing import Callable, List, Optional, Sequence

from ..errors import ExplanationFailure
from ..models.profile import UserProfile
from ..models.scoring import ScoredCandidate, SubScores
from ..models.template import PathTemplate
from ..protocols import TextGenerationCapability

logger = logging.getLogger(__name__)

EXPLANATION_COUNT = 3
DREAM_SNIPPET_CHARS = 40
DEFAULT_SPARK_PHRASE = "new opportunities"
DEFAULT_VALUE_PHRASE = "personal growth"


def fallback_explanation(profile: UserProfile) -> List[str]:
    """Deterministic bullets built from the profile alone."""
    spark = profile.first_spark or DEFAULT_SPARK_PHRASE
    value = profile.first_value or DEFAULT_VALUE_PHRASE
    dream = profile.dream.strip()[:DREAM_SNIPPET_CHARS]
    return [
        f"Matches your interest in {spark}",
        f"Aligns with your value of {value}",
        f'Supports your dream: "{dream}..."',
    ]


def build_explanation_prompt(
    template: PathTemplate,
    profile: UserProfile,
    scores: SubScores,
) -> str:
    return f"""You are helping someone discover a career or business path that fits them.

User Profile:
- Interests/Sparks: {', '.join(profile.sparks)}
- Core Values: {', '.join(profile.values)}
- Dream: {profile.dream.strip()}

Recommended Path: {template.title}
Description: {template.description or 'N/A'}
Category: {template.category} - {template.subcategory or 'General'}

Match Scores:
- Skills Match: {scores.skills_match * 100:.0f}%
- Values Alignment: {scores.values_alignment * 100:.0f}%
- Overall Fit: {scores.total * 100:.0f}%

Generate exactly 3 short, personalized bullet points explaining why this path fits this person. Each bullet should:
1. Refer to their sparks, values, or dream
2. Be encouraging and actionable
3. Be under 15 words
4. Start with an action word or benefit

Return ONLY a JSON array of 3 strings, nothing else. Example format:
["Aligns with your passion for helping others", "Low startup cost fits your budget", "Flexible hours match your availability"]"""


def parse_explanation(raw) -> List[str]:
    """Accept exactly three non-empty strings; anything else is an ExplanationFailure."""
    if not isinstance(raw, (list, tuple)):
        raise ExplanationFailure(f"expected a list, got {type(raw).__name__}")
    if len(raw) != EXPLANATION_COUNT:
        raise ExplanationFailure(f"expected {EXPLANATION_COUNT} items, got {len(raw)}")
    items = []
    for item in raw:
        if not isinstance(item, str) or not item.strip():
            raise ExplanationFailure("explanation items must be non-empty strings")
        items.append(item.strip())
    return items


class ExplanationGenerator:
    """
    Produces why_you bullets for ranked candidates.

    With no text generator configured every candidate gets the fallback.
    """

    def __init__(
        self,
        generator: Optional[TextGenerationCapability] = None,
        timeout_seconds: float = 20.0,
        concurrency: int = 5,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._generator = generator
        self.timeout_seconds = timeout_seconds
        self.concurrency = concurrency
        self._clock = clock

    async def explain(
        self,
        template: PathTemplate,
        profile: UserProfile,
        scores: SubScores,
        timeout_seconds: Optional[float] = None,
    ) -> List[str]:
        """timeout_seconds can only shorten the per-call timeout; 0 skips the call."""
        if self._generator is None:
            return fallback_explanation(profile)
        timeout = self.timeout_seconds
        if timeout_seconds is not None:
            timeout = min(timeout, timeout_seconds)
        if timeout <= 0:
            logger.warning("[explain_fallback] template=%s reason=request deadline passed", template.id)
            return fallback_explanation(profile)
        prompt = build_explanation_prompt(template, profile, scores)
        try:
            raw = await asyncio.wait_for(self._generator.generate(prompt), timeout=timeout)
            return parse_explanation(raw)
        except asyncio.TimeoutError:
            logger.warning(
                "[explain_fallback] template=%s reason=timeout after %.2fs",
                template.id,
                timeout,
            )
        except Exception as e:
            logger.warning("[explain_fallback] template=%s reason=%s", template.id, e)
        return fallback_explanation(profile)

    async def explain_all(
        self,
        candidates: Sequence[ScoredCandidate],
        profile: UserProfile,
        deadline: Optional[float] = None,
    ) -> List[List[str]]:
        """
        One explanation per candidate, same order as candidates.

        deadline is a value of this generator's clock. Each call waits at most
        until then, so candidates still queued behind the semaphore when it
        passes get the fallback without a call.
        """
        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(candidate: ScoredCandidate) -> List[str]:
            async with semaphore:
                remaining = None if deadline is None else deadline - self._clock()
                return await self.explain(
                    candidate.template, profile, candidate.scores, timeout_seconds=remaining
                )

        return list(await asyncio.gather(*(bounded(c) for c in candidates)))
