"""
Ranked retrieval of matches for a subject profile.

For every candidate in the pool (excluding the subject):

- Score the pair with the CompatibilityEngine (cache-checked)
- Sort by overall score, highest first; Python's sort is stable, so equal
  scores keep their pool order
- Drop candidates below the minimum score
- Truncate to the requested limit

`find_matches_for_all` runs several subjects in parallel against the same
pool. The score cache is the only shared state and coalesces duplicate work.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional, Sequence

from .compatibility import CompatibilityEngine
from .data_models import Match, MatchOptions, Profile

logger = logging.getLogger(__name__)


class MatchFinder:
    def __init__(self, engine: CompatibilityEngine, default_options: Optional[MatchOptions] = None):
        self.engine = engine
        self.default_options = default_options or MatchOptions()

    def _resolve_options(self, options: Optional[MatchOptions], limit: Optional[int]) -> MatchOptions:
        """Fill fields the caller left unset from the defaults; `limit` overrides both."""
        if options is None:
            resolved = self.default_options
        else:
            unset = {
                name: getattr(self.default_options, name)
                for name in MatchOptions.model_fields
                if name not in options.model_fields_set
            }
            resolved = options.model_copy(update=unset)
        if limit is not None:
            resolved = resolved.model_copy(update={"limit": limit})
        return resolved

    def find_matches(
        self,
        subject: Profile,
        pool: Iterable[Profile],
        options: Optional[MatchOptions] = None,
        *,
        limit: Optional[int] = None,
    ) -> List[Match]:
        """Return the best-scoring candidates for `subject`.

        Args:
            subject: Profile to find matches for.
            pool: Candidate profiles; the subject itself (by id) is skipped.
            options: Limit and minimum score; defaults to the finder's options.
            limit: Shortcut overriding `options.limit`.

        Returns:
            Matches sorted by `score.overall` descending, at most `limit` long.
            An empty pool or a non-positive limit yields an empty list.
        """
        opts = self._resolve_options(options, limit)
        if opts.limit <= 0:
            return []

        matches: List[Match] = []
        for candidate in pool:
            if candidate.id == subject.id:
                continue
            score = self.engine.calculate_compatibility(subject, candidate)
            matches.append(Match(candidate_profile=candidate, score=score))

        scored = len(matches)
        matches.sort(key=lambda m: m.score.overall, reverse=True)
        if opts.min_score > 0:
            matches = [m for m in matches if m.score.overall >= opts.min_score]
        top = matches[: opts.limit]
        logger.info(
            "Found %d matches for %s (scored %d candidates, limit=%d)",
            len(top),
            subject.id,
            scored,
            opts.limit,
        )
        return top

    def find_matches_for_all(
        self,
        subjects: Sequence[Profile],
        pool: Sequence[Profile],
        options: Optional[MatchOptions] = None,
        max_workers: int = 4,
    ) -> Dict[str, List[Match]]:
        """Run `find_matches` for each subject concurrently.

        Returns:
            Mapping of subject id to its ranked matches, in subject order.
        """
        pool = list(pool)
        if not subjects:
            return {}
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
            futures = [(s.id, executor.submit(self.find_matches, s, pool, options)) for s in subjects]
            return {subject_id: future.result() for subject_id, future in futures}
