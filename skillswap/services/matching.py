"""
Pure skill-matching rules.

Nothing here touches the database: callers hand in skill ledger entries
(anything with ``skill_id`` and ``direction``) and candidate users, and get
back classifications. MatchService wires these to repository queries.

Match categories, in priority order:
    PERFECT_SWAP (100): they offer something I want AND want something I offer
    TEACHER      (70):  they offer something I want
    LEARNER      (60):  they want something I offer
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence
from uuid import UUID

from skillswap.models.skill import SkillDirection
from skillswap.schemas.match import MatchType, MatchTypeFilter

MATCH_SCORES: dict[MatchType, int] = {
    MatchType.PERFECT_SWAP: 100,
    MatchType.TEACHER: 70,
    MatchType.LEARNER: 60,
}

# Computation order doubles as dedup priority
CATEGORY_ORDER: tuple[MatchType, ...] = (
    MatchType.PERFECT_SWAP,
    MatchType.TEACHER,
    MatchType.LEARNER,
)

_FILTER_TO_CATEGORY = {
    MatchTypeFilter.PERFECT: MatchType.PERFECT_SWAP,
    MatchTypeFilter.TEACHERS: MatchType.TEACHER,
    MatchTypeFilter.LEARNERS: MatchType.LEARNER,
}


def categories_for_filter(type_filter: Optional[MatchTypeFilter]) -> list[MatchType]:
    """Categories to compute, in priority order. No filter means all three."""
    if type_filter is None:
        return list(CATEGORY_ORDER)
    return [_FILTER_TO_CATEGORY[MatchTypeFilter(type_filter)]]


def skill_ids(entries: Iterable[Any], direction: SkillDirection) -> set[UUID]:
    """Skill ids of the ledger entries in one direction."""
    return {entry.skill_id for entry in entries if entry.direction == direction}


@dataclass
class PairComparison:
    """Symmetric skill intersection between the viewer and one other user."""

    match_type: MatchType
    they_can_teach_me: list = field(default_factory=list)
    i_can_teach_them: list = field(default_factory=list)


def classify_pair(my_entries: Sequence[Any], their_entries: Sequence[Any]) -> PairComparison:
    """
    Compare two skill ledgers without looking at anyone else.

    Args:
        my_entries: The viewer's ledger entries
        their_entries: The other user's ledger entries

    Returns:
        PairComparison whose lists hold the original entries: the other
        user's OFFERED entries I want, and my OFFERED entries they want.

    Example:
        >>> result = classify_pair(me.user_skills, them.user_skills)
        >>> result.match_type
        <MatchType.PERFECT_SWAP: 'PERFECT_SWAP'>
    """
    my_wanted = skill_ids(my_entries, SkillDirection.WANTED)
    their_wanted = skill_ids(their_entries, SkillDirection.WANTED)

    they_can_teach_me = [
        entry for entry in their_entries
        if entry.direction == SkillDirection.OFFERED and entry.skill_id in my_wanted
    ]
    i_can_teach_them = [
        entry for entry in my_entries
        if entry.direction == SkillDirection.OFFERED and entry.skill_id in their_wanted
    ]

    if they_can_teach_me and i_can_teach_them:
        match_type = MatchType.PERFECT_SWAP
    elif they_can_teach_me:
        match_type = MatchType.TEACHER
    elif i_can_teach_them:
        match_type = MatchType.LEARNER
    else:
        match_type = MatchType.NO_MATCH

    return PairComparison(
        match_type=match_type,
        they_can_teach_me=they_can_teach_me,
        i_can_teach_them=i_can_teach_them,
    )


@dataclass
class ScoredCandidate:
    user: Any
    match_type: MatchType
    match_score: int


class MatchAccumulator:
    """
    Insertion-ordered collection of match candidates keyed by user id.

    The first category to claim a user keeps it; later categories skip users
    already present. Feed categories in CATEGORY_ORDER to get the
    PERFECT_SWAP > TEACHER > LEARNER priority.
    """

    def __init__(self) -> None:
        self._by_user_id: dict[Any, ScoredCandidate] = {}

    def __contains__(self, user_id: Any) -> bool:
        return user_id in self._by_user_id

    def __len__(self) -> int:
        return len(self._by_user_id)

    def add(self, match_type: MatchType, users: Iterable[Any]) -> int:
        """Add users under ``match_type``, skipping ids already claimed. Returns how many were added."""
        added = 0
        score = MATCH_SCORES[match_type]
        for user in users:
            if user.id in self._by_user_id:
                continue
            self._by_user_id[user.id] = ScoredCandidate(user=user, match_type=match_type, match_score=score)
            added += 1
        return added

    def ranked(self) -> list[ScoredCandidate]:
        """Candidates by descending score; equal scores keep insertion order."""
        return sorted(self._by_user_id.values(), key=lambda c: c.match_score, reverse=True)
