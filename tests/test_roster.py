import pytest
from httpx import AsyncClient

from eduhub.errors import Forbidden
from eduhub.services.roster import ensure_authorized, enrolled_students, is_authorized


@pytest.mark.asyncio
async def test_teacher_sees_only_own_classes(client: AsyncClient, school):
    teacher = school.teacher()
    other = school.teacher()
    algebra = school.school_class(name="Algebra", teacher=teacher)
    school.school_class(name="Biology", subject="Science", teacher=other)

    response = await client.get("/teacher/classes", headers=school.login(teacher))
    assert response.status_code == 200
    assert response.json() == {
        "classes": [
            {"id": algebra.id, "name": "Algebra", "subject": "Mathematics", "section": "A", "gradeLevel": 6}
        ]
    }


@pytest.mark.asyncio
async def test_teacher_with_no_classes(client: AsyncClient, school):
    teacher = school.teacher()
    response = await client.get("/teacher/classes", headers=school.login(teacher))
    assert response.json() == {"classes": []}


def test_authorization_is_all_or_nothing(session, school):
    teacher = school.teacher()
    mine = school.school_class(teacher=teacher)
    theirs = school.school_class(teacher=school.teacher())

    assert is_authorized(session, teacher.id, mine.id)
    assert not is_authorized(session, teacher.id, theirs.id)
    ensure_authorized(session, teacher.id, [mine.id])
    with pytest.raises(Forbidden):
        ensure_authorized(session, teacher.id, [mine.id, theirs.id])


def test_enrolled_students_sorted_by_name(session, school):
    zed = school.student(first_name="Zed", last_name="Adams")
    amy = school.student(first_name="Amy", last_name="Zimmer")
    bob = school.student(first_name="Bob", last_name="Adams")
    school_class = school.school_class(students=[amy, zed, bob])

    roster = enrolled_students(session, school_class.id)
    assert [s.name for s in roster] == ["Bob Adams", "Zed Adams", "Amy Zimmer"]
    assert roster[0].student_code == bob.student_code
