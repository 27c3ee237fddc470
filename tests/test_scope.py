from types import SimpleNamespace

from classbook.core.scope import AssignmentGrant, AssignmentScope, resolve_scope
from classbook.crud import catalog
from classbook.db import SchoolClass

SCHOOL_YEAR = "2025-2026"


def teacher_scope(*grants):
    return AssignmentScope(user_id=5, is_admin=False, grants=tuple(grants))


def test_admin_sees_everything():
    scope = resolve_scope(SimpleNamespace(id=1, role="admin"), [])

    assert scope.unrestricted
    assert scope.class_ids() is None
    assert scope.can_access_class(999, subject_id=42)


def test_teacher_without_assignments_sees_nothing():
    scope = resolve_scope(SimpleNamespace(id=5, role="teacher"), [])

    assert scope.class_ids() == frozenset()
    assert not scope.can_access_class(1)


def test_grants_are_filtered_by_subject_and_year():
    scope = teacher_scope(
        AssignmentGrant(class_id=1, subject_id=10, school_year="2025-2026", is_homeroom=True),
        AssignmentGrant(class_id=2, subject_id=20, school_year="2025-2026"),
        AssignmentGrant(class_id=3, subject_id=10, school_year="2024-2025"),
    )

    assert scope.class_ids() == {1, 2, 3}
    assert scope.class_ids(subject_id=10) == {1, 3}
    assert scope.class_ids(subject_id=10, school_year="2025-2026") == {1}
    assert scope.subject_ids("2025-2026") == {10, 20}
    assert scope.homeroom_class_ids() == {1}
    assert scope.can_access_class(2)
    assert not scope.can_access_class(2, subject_id=10)


def test_query_filter_fails_closed(db, school):
    query = db.query(SchoolClass)

    empty = teacher_scope().apply_class_filter(query, SchoolClass.id)
    only_a = teacher_scope(
        AssignmentGrant(school["class_a"].id, school["informatics"].id, SCHOOL_YEAR)
    ).apply_class_filter(query, SchoolClass.id)

    assert empty.all() == []
    assert [c.name for c in only_a.all()] == ["6A"]


def test_list_classes_respects_scope(db, school):
    scope = resolve_scope(school["teacher"], school["teacher"].assignments)

    assert [c.name for c in catalog.list_classes(db, scope)] == ["6A"]
    assert catalog.list_classes(db, scope, subject_id=school["art"].id) == []
    admin_scope = resolve_scope(school["admin"], [])
    assert [c.name for c in catalog.list_classes(db, admin_scope)] == ["6A", "6B"]
