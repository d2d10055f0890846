"""
Lexical brandability scorer.

Scores the label of a domain (the part before the first dot) with a fixed,
additive rule set. Labels matching any exclusion pattern are dropped before
scoring, so the scoring pass never has to re-validate characters.
"""

import re
from collections.abc import Iterable
from typing import Optional

from .config import ScorerConfig
from .models import ScoredDomain


LEXICON_BONUS = 30
VOWEL_BONUS = 5
CONSONANT_CLUSTER_PENALTY = 15
ALTERNATION_BONUS = 3
SHORT_LABEL_MAX_LENGTH = 6
SHORT_LABEL_BONUS = 5


class LexicalScorer:
    """
    Stateless heuristic ranking of domain labels.

    Rules, applied to the lower-cased label:
    - excluded on 4+ consecutive consonants, any non-Latin letter, or
      16+ characters
    - +30 for an exact lexicon match
    - +5 per vowel (y counts as a vowel)
    - -15 when a run of 3+ consonants occurs
    - +3 per adjacent pair whose vowel/consonant class changes
    - +(7 - length) * 5 for labels of at most 6 characters
    """

    def __init__(self, config: Optional[ScorerConfig] = None) -> None:
        config = config or ScorerConfig()
        self._lexicon = frozenset(word.lower() for word in config.lexicon)
        self._vowels = frozenset(config.vowels.lower())
        self._exclusion_patterns = [
            re.compile(pattern) for pattern in config.exclusion_patterns
        ]
        self._consonant_cluster = re.compile(config.consonant_cluster_pattern)

    @staticmethod
    def extract_label(domain: str) -> str:
        """Return the text before the first dot, or the whole string."""
        return domain.split(".", 1)[0]

    def is_excluded(self, label: str) -> bool:
        return any(pattern.search(label) for pattern in self._exclusion_patterns)

    def evaluate(self, domain: str) -> Optional[ScoredDomain]:
        """
        Score a single domain.

        Args:
            domain: Domain string, any case

        Returns:
            ScoredDomain with the lower-cased domain, or None if excluded
        """
        domain = domain.lower()
        label = self.extract_label(domain)

        if self.is_excluded(label):
            return None

        return ScoredDomain(domain=domain, score=self.score_label(label))

    def score_label(self, label: str) -> int:
        score = 0

        if label in self._lexicon:
            score += LEXICON_BONUS

        score += sum(1 for c in label if c in self._vowels) * VOWEL_BONUS

        # Exclusion already removed 4+ runs, so this only fires on exact 3-runs
        if self._consonant_cluster.search(label):
            score -= CONSONANT_CLUSTER_PENALTY

        score += self.count_alternations(label) * ALTERNATION_BONUS

        if 0 < len(label) <= SHORT_LABEL_MAX_LENGTH:
            score += (SHORT_LABEL_MAX_LENGTH + 1 - len(label)) * SHORT_LABEL_BONUS

        return score

    def count_alternations(self, label: str) -> int:
        """Count adjacent pairs whose vowel/consonant class differs."""
        alternations = 0
        previous_is_vowel: Optional[bool] = None
        for c in label:
            is_vowel = c in self._vowels
            if previous_is_vowel is not None and previous_is_vowel != is_vowel:
                alternations += 1
            previous_is_vowel = is_vowel
        return alternations

    def rank_all(self, domains: Iterable[str]) -> list[ScoredDomain]:
        """
        Evaluate every domain and sort survivors by score, highest first.

        The sort is stable, so equal scores keep their input order.
        """
        scored = [
            result for result in (self.evaluate(d) for d in domains)
            if result is not None
        ]
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored
