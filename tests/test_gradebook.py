import pytest
from httpx import AsyncClient

from eduhub.models import Grade, StudentAssignment, SubmissionStatus
from eduhub.schemas.gradebook import GradeEntry
from eduhub.services.gradebook import compute_gradebook, weighted_average


def entry(score, max_points):
    return GradeEntry(
        assignment_id=1,
        assignment_title="x",
        score=score,
        max_points=max_points,
        percentage=score / max_points * 100,
    )


def test_weighted_average_weights_by_points():
    # 125 / 150, not the mean of 80% and 90%
    assert weighted_average([entry(80, 100), entry(45, 50)]) == 83.33


def test_weighted_average_without_grades_is_zero():
    assert weighted_average([]) == 0.0


def test_gradebook_only_counts_this_class(session, school):
    teacher = school.teacher()
    student = school.student()
    maths = school.school_class(teacher=teacher, students=[student])
    science = school.school_class(subject="Science", teacher=teacher, students=[student])
    quiz = school.assignment(teacher, [maths], points=50)
    lab = school.assignment(teacher, [science], points=100)
    school.grade(student, quiz, 25)
    school.grade(student, lab, 100)

    gradebook = compute_gradebook(session, maths.id)
    assert [a.id for a in gradebook.assignments] == [quiz.id]
    (row,) = gradebook.students
    assert row.average == 50.0
    assert [g.assignment_id for g in row.grades] == [quiz.id]


def test_ungraded_student_averages_zero(session, school):
    teacher = school.teacher()
    student = school.student()
    school_class = school.school_class(teacher=teacher, students=[student])
    school.assignment(teacher, [school_class])

    (row,) = compute_gradebook(session, school_class.id).students
    assert row.average == 0.0
    assert row.grades == []


@pytest.mark.asyncio
async def test_gradebook_endpoint(client: AsyncClient, school):
    teacher = school.teacher()
    student = school.student()
    school_class = school.school_class(teacher=teacher, students=[student])
    essay = school.assignment(teacher, [school_class], points=100, title="Essay")
    quiz = school.assignment(teacher, [school_class], points=50, title="Quiz")
    school.grade(student, essay, 80)
    school.grade(student, quiz, 45)

    response = await client.get(
        "/teacher/gradebook", headers=school.login(teacher), params={"classId": school_class.id}
    )
    assert response.status_code == 200
    body = response.json()
    assert {a["title"] for a in body["assignments"]} == {"Essay", "Quiz"}
    (row,) = body["students"]
    assert row["studentId"] == student.student_code
    assert row["average"] == 83.33
    assert {g["assignmentTitle"] for g in row["grades"]} == {"Essay", "Quiz"}


@pytest.mark.asyncio
async def test_gradebook_requires_class_id(client: AsyncClient, school):
    response = await client.get("/teacher/gradebook", headers=school.login(school.teacher()))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_gradebook_of_other_teachers_class(client: AsyncClient, school):
    school_class = school.school_class(teacher=school.teacher())
    response = await client.get(
        "/teacher/gradebook", headers=school.login(school.teacher()), params={"classId": school_class.id}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_record_grade_creates_then_overwrites(client: AsyncClient, school, session):
    teacher = school.teacher()
    student = school.student()
    school_class = school.school_class(teacher=teacher, students=[student])
    test = school.assignment(teacher, [school_class], points=40)
    headers = school.login(teacher)

    first = await client.put(
        "/teacher/grades", headers=headers, json={"assignmentId": test.id, "studentId": student.id, "score": 30}
    )
    assert first.status_code == 200
    assert first.json()["grade"]["percentage"] == 75.0

    second = await client.put(
        "/teacher/grades", headers=headers, json={"assignmentId": test.id, "studentId": student.id, "score": 40}
    )
    assert second.json()["grade"]["id"] == first.json()["grade"]["id"]
    assert session.query(Grade).count() == 1
    assert session.query(Grade).one().percentage == 100.0

    stub = session.query(StudentAssignment).filter_by(assignment_id=test.id, student_id=student.id).one()
    assert stub.status == SubmissionStatus.GRADED


@pytest.mark.asyncio
async def test_record_grade_for_student_outside_the_class(client: AsyncClient, school):
    teacher = school.teacher()
    school_class = school.school_class(teacher=teacher)
    test = school.assignment(teacher, [school_class])
    stranger = school.student()

    response = await client.put(
        "/teacher/grades",
        headers=school.login(teacher),
        json={"assignmentId": test.id, "studentId": stranger.id, "score": 10},
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_record_grade_unknown_assignment(client: AsyncClient, school):
    response = await client.put(
        "/teacher/grades",
        headers=school.login(school.teacher()),
        json={"assignmentId": 404, "studentId": 1, "score": 10},
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Assignment not found"}
