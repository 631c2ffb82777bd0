from datetime import date, timedelta

import pytest
from httpx import AsyncClient

from eduhub.models import AttendanceStatus, BehaviorNote, UserRole
from eduhub.services import attendance
from eduhub.services.profile import RECENT_ATTENDANCE, attendance_stats, grade_stats


@pytest.mark.asyncio
async def test_student_profile(client: AsyncClient, school, session):
    teacher = school.teacher()
    student = school.student(first_name="Jane", last_name="Student")
    school.parent(student, relationship="Mother", email="mom@school.edu", first_name="Mary", last_name="Student")
    maths = school.school_class(name="Maths", subject="Mathematics", teacher=teacher, students=[student])
    art = school.school_class(name="Art", subject="Art", teacher=teacher, students=[student])
    school.grade(student, school.assignment(teacher, [maths], points=100), 80)
    school.grade(student, school.assignment(teacher, [maths], points=50), 45)
    attendance.upsert(session, maths.id, student.id, date(2024, 9, 2), None, AttendanceStatus.PRESENT)
    attendance.upsert(session, maths.id, student.id, date(2024, 9, 3), None, AttendanceStatus.ABSENT)
    attendance.upsert(session, art.id, student.id, date(2024, 9, 3), None, AttendanceStatus.LATE)

    response = await client.get(f"/teacher/students/{student.id}", headers=school.login(teacher))
    assert response.status_code == 200
    profile = response.json()["profile"]

    assert profile["name"] == "Jane Student"
    assert profile["studentId"] == student.student_code
    assert profile["gradeLevel"] == 6

    stats = profile["attendance"]
    assert (stats["totalPresent"], stats["totalAbsent"], stats["totalLate"]) == (1, 1, 1)
    assert stats["longestStreak"] == 0
    assert {(a["status"], a["class"]) for a in stats["recentAbsences"]} == {("ABSENT", "Maths"), ("LATE", "Art")}

    grades = profile["grades"]
    assert grades["currentAverage"] == 83.33
    assert len(grades["trend"]) == 2
    assert {s["subject"]: s["average"] for s in grades["bySubject"]} == {"Art": 0.0, "Mathematics": 83.33}

    assert profile["parents"] == [
        {"id": profile["parents"][0]["id"], "name": "Mary Student", "email": "mom@school.edu", "phone": None, "relationship": "Mother"}
    ]


@pytest.mark.asyncio
async def test_unknown_student(client: AsyncClient, school):
    response = await client.get("/teacher/students/4242", headers=school.login(school.teacher()))
    assert response.status_code == 404
    assert response.json() == {"error": "Student not found"}


@pytest.mark.asyncio
async def test_profile_hidden_from_parents(client: AsyncClient, school):
    student = school.student()
    parent = school.parent(student)
    response = await client.get(f"/teacher/students/{student.id}", headers=school.login(parent))
    assert response.status_code == 403


def test_attendance_stats_use_recent_records_only(session, school):
    student = school.student()
    school_class = school.school_class(students=[student])
    start = date(2024, 9, 2)
    for offset in range(RECENT_ATTENDANCE + 5):
        status = AttendanceStatus.ABSENT if offset < 5 else AttendanceStatus.PRESENT
        attendance.upsert(session, school_class.id, student.id, start + timedelta(days=offset), None, status)

    stats = attendance_stats(session, student.id)
    # The five absences are the oldest records and fall outside the window
    assert stats.total_present == RECENT_ATTENDANCE
    assert stats.total_absent == 0
    assert stats.recent_absences == []


def test_grade_stats_without_grades(session, school):
    student = school.student()
    school.school_class(subject="History", students=[student])
    stats = grade_stats(session, student)
    assert stats.current_average == 0.0
    assert stats.trend == []
    assert [(s.subject, s.average) for s in stats.by_subject] == [("History", 0.0)]


@pytest.mark.asyncio
async def test_add_behavior_note(client: AsyncClient, school, session):
    teacher = school.teacher()
    student = school.student()
    headers = school.login(teacher)

    response = await client.post(
        f"/teacher/students/{student.id}/behavior",
        headers=headers,
        json={"type": "POSITIVE", "title": "Helped a classmate", "description": "During group work"},
    )
    assert response.status_code == 201
    assert response.json()["note"]["title"] == "Helped a classmate"
    assert session.query(BehaviorNote).one().teacher_id == teacher.id

    profile = (await client.get(f"/teacher/students/{student.id}", headers=headers)).json()["profile"]
    assert [n["type"] for n in profile["behavior"]] == ["POSITIVE"]


@pytest.mark.asyncio
async def test_behavior_note_for_unknown_student(client: AsyncClient, school):
    response = await client.post(
        "/teacher/students/999/behavior",
        headers=school.login(school.teacher()),
        json={"type": "NOTE", "title": "x"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_students_cannot_write_behavior_notes(client: AsyncClient, school):
    student = school.student()
    response = await client.post(
        f"/teacher/students/{student.id}/behavior",
        headers=school.login(school.user(UserRole.STUDENT)),
        json={"type": "NOTE", "title": "x"},
    )
    assert response.status_code == 403
