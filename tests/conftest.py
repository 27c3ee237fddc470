from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classbook.api.deps import get_db
from classbook.core.security import get_password_hash
from classbook.db import (
    Attendance, Base, Criterion, Evaluation, Grade, SchoolClass, Student,
    Subject, TeacherAssignment, Topic, User,
)
from classbook.main import app

SCHOOL_YEAR = "2025-2026"
LESSON_DAY = date(2025, 10, 6)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def school(db):
    """A small school: one grade, two subjects, two classes, one assigned teacher."""
    admin = User(email="admin@school.test", hashed_password=get_password_hash("adminpass"),
                 full_name="Admin", role="admin")
    teacher = User(email="teacher@school.test", hashed_password=get_password_hash("teachpass"),
                   full_name="Tamara Teacher", role="teacher")
    idle = User(email="idle@school.test", hashed_password=get_password_hash("idlepass"),
                full_name="Ivan Idle", role="teacher")
    grade = Grade(name="Grade 6")
    informatics = Subject(name="Informatics")
    art = Subject(name="Art")
    db.add_all([admin, teacher, idle, grade, informatics, art])
    db.flush()

    class_a = SchoolClass(name="6A", grade_id=grade.id, school_year=SCHOOL_YEAR)
    class_b = SchoolClass(name="6B", grade_id=grade.id, school_year=SCHOOL_YEAR)
    db.add_all([class_a, class_b])
    db.flush()

    anna = Student(name="Anna", computer_name="C5", class_id=class_a.id)
    boris = Student(name="Boris", computer_name="A1", class_id=class_a.id)
    chen = Student(name="Chen", computer_name=None, class_id=class_a.id)
    dina = Student(name="Dina", computer_name="A1", class_id=class_b.id)
    db.add_all([anna, boris, chen, dina])

    coding = Topic(name="Coding basics", grade_id=grade.id, subject_id=informatics.id, display_order=1)
    drawing = Topic(name="Drawing", grade_id=grade.id, subject_id=art.id, display_order=2)
    db.add_all([coding, drawing])
    db.flush()

    loops = Criterion(name="Loops", topic_id=coding.id, display_order=1)
    variables = Criterion(name="Variables", topic_id=coding.id, display_order=2)
    functions = Criterion(name="Functions", topic_id=coding.id, display_order=3)
    shading = Criterion(name="Shading", topic_id=drawing.id, display_order=1)
    db.add_all([loops, variables, functions, shading])

    db.add(TeacherAssignment(user_id=teacher.id, class_id=class_a.id, subject_id=informatics.id,
                             school_year=SCHOOL_YEAR, is_homeroom=True))
    db.commit()

    return {
        "admin": admin, "teacher": teacher, "idle": idle, "grade": grade,
        "informatics": informatics, "art": art,
        "class_a": class_a, "class_b": class_b,
        "anna": anna, "boris": boris, "chen": chen, "dina": dina,
        "coding": coding, "drawing": drawing,
        "loops": loops, "variables": variables, "functions": functions, "shading": shading,
    }


@pytest.fixture
def graded(db, school):
    """Anna: loops 4 and 3, variables 3, functions 1 on a day she was marked absent."""
    s = school
    second_day = date(2025, 10, 13)
    db.add_all([
        Evaluation(student_id=s["anna"].id, criterion_id=s["loops"].id, class_id=s["class_a"].id,
                   evaluated_date=LESSON_DAY, rating=4),
        Evaluation(student_id=s["anna"].id, criterion_id=s["loops"].id, class_id=s["class_a"].id,
                   evaluated_date=date(2025, 10, 8), rating=3),
        Evaluation(student_id=s["anna"].id, criterion_id=s["variables"].id, class_id=s["class_a"].id,
                   evaluated_date=LESSON_DAY, rating=3),
        # Absence only affects the entry grid, the stored rating still counts
        Evaluation(student_id=s["anna"].id, criterion_id=s["functions"].id, class_id=s["class_a"].id,
                   evaluated_date=second_day, rating=1),
        Evaluation(student_id=s["boris"].id, criterion_id=s["loops"].id, class_id=s["class_a"].id,
                   evaluated_date=LESSON_DAY, rating=1),
        Attendance(student_id=s["anna"].id, class_id=s["class_a"].id, date=second_day, status="absent"),
        Attendance(student_id=s["boris"].id, class_id=s["class_a"].id, date=second_day, status="present"),
    ])
    db.commit()
    return school


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def admin_headers(client, school):
    return _login(client, "admin@school.test", "adminpass")


@pytest.fixture
def teacher_headers(client, school):
    return _login(client, "teacher@school.test", "teachpass")


@pytest.fixture
def idle_headers(client, school):
    return _login(client, "idle@school.test", "idlepass")
