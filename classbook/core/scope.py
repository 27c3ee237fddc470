# classbook/core/scope.py
"""
What a signed-in user is allowed to see.

An ``AssignmentScope`` is resolved once per request from the user and the
user's teacher assignments and then passed to every query that lists
classes or their data. Admins are unrestricted. A teacher with no matching
assignment sees nothing, never everything.
"""
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, NamedTuple, Optional

from sqlalchemy import false

logger = logging.getLogger(__name__)


class AssignmentGrant(NamedTuple):
    class_id: int
    subject_id: int
    school_year: str
    is_homeroom: bool = False


@dataclass(frozen=True)
class AssignmentScope:
    user_id: int
    is_admin: bool
    grants: tuple = ()

    @property
    def unrestricted(self) -> bool:
        return self.is_admin

    def _matching(self, subject_id: Optional[int] = None, school_year: Optional[str] = None):
        for grant in self.grants:
            if subject_id is not None and grant.subject_id != subject_id:
                continue
            if school_year is not None and grant.school_year != school_year:
                continue
            yield grant

    def class_ids(
        self, subject_id: Optional[int] = None, school_year: Optional[str] = None
    ) -> Optional[FrozenSet[int]]:
        """Visible class ids, or None when no filtering applies (admin)."""
        if self.unrestricted:
            return None
        return frozenset(g.class_id for g in self._matching(subject_id, school_year))

    def subject_ids(self, school_year: Optional[str] = None) -> Optional[FrozenSet[int]]:
        if self.unrestricted:
            return None
        return frozenset(g.subject_id for g in self._matching(school_year=school_year))

    def homeroom_class_ids(self) -> FrozenSet[int]:
        return frozenset(g.class_id for g in self.grants if g.is_homeroom)

    def can_access_class(self, class_id: int, subject_id: Optional[int] = None) -> bool:
        allowed = self.class_ids(subject_id=subject_id)
        return allowed is None or class_id in allowed

    def apply_class_filter(
        self,
        query,
        column,
        subject_id: Optional[int] = None,
        school_year: Optional[str] = None,
    ):
        """Narrow a SQLAlchemy query on ``column`` to the visible classes."""
        allowed = self.class_ids(subject_id=subject_id, school_year=school_year)
        if allowed is None:
            return query
        if not allowed:
            logger.debug("User %s has no matching assignment, empty result", self.user_id)
            return query.filter(false())
        return query.filter(column.in_(sorted(allowed)))


def resolve_scope(user, assignments: Iterable) -> AssignmentScope:
    if user.role == "admin":
        return AssignmentScope(user_id=user.id, is_admin=True)
    grants = tuple(
        AssignmentGrant(
            class_id=a.class_id,
            subject_id=a.subject_id,
            school_year=a.school_year,
            is_homeroom=bool(a.is_homeroom),
        )
        for a in assignments
    )
    return AssignmentScope(user_id=user.id, is_admin=False, grants=grants)
