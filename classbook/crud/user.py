from sqlalchemy.orm import Session
from classbook.db.models.user import User
from classbook.db.models.assignment import TeacherAssignment
from classbook.core.security import get_password_hash


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, user_data):
    db_user = User(
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        full_name=user_data.full_name,
        role=user_data.role,
        is_active=True,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def get_teachers(db: Session):
    return db.query(User).filter(User.role == "teacher").order_by(User.full_name).all()


def get_assignments_for_user(db: Session, user_id: int, school_year: str | None = None):
    query = db.query(TeacherAssignment).filter(TeacherAssignment.user_id == user_id)
    if school_year:
        query = query.filter(TeacherAssignment.school_year == school_year)
    return query.all()


def list_assignments(db: Session, school_year: str | None = None, user_id: int | None = None):
    query = db.query(TeacherAssignment)
    if school_year:
        query = query.filter(TeacherAssignment.school_year == school_year)
    if user_id is not None:
        query = query.filter(TeacherAssignment.user_id == user_id)
    return query.order_by(TeacherAssignment.user_id, TeacherAssignment.class_id).all()


def create_assignments(db: Session, data):
    """One assignment per class id; an identical existing grant is kept as is."""
    created = []
    for class_id in data.class_ids:
        existing = db.query(TeacherAssignment).filter(
            TeacherAssignment.user_id == data.user_id,
            TeacherAssignment.class_id == class_id,
            TeacherAssignment.subject_id == data.subject_id,
            TeacherAssignment.school_year == data.school_year,
        ).first()
        if existing:
            existing.is_homeroom = data.is_homeroom
            created.append(existing)
            continue
        assignment = TeacherAssignment(
            user_id=data.user_id,
            class_id=class_id,
            subject_id=data.subject_id,
            school_year=data.school_year,
            is_homeroom=data.is_homeroom,
        )
        db.add(assignment)
        created.append(assignment)
    db.commit()
    for assignment in created:
        db.refresh(assignment)
    return created


def delete_assignment(db: Session, assignment_id: int) -> bool:
    assignment = db.query(TeacherAssignment).filter(TeacherAssignment.id == assignment_id).first()
    if not assignment:
        return False
    db.delete(assignment)
    db.commit()
    return True
