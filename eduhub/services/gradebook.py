from __future__ import annotations

from typing import Iterable

from sqlalchemy.orm import Session

from eduhub.errors import Forbidden, NotFound
from eduhub.models import (
    Assignment,
    AssignmentClass,
    ClassEnrollment,
    ClassTeacher,
    Grade,
    SchoolClass,
    StudentAssignment,
    StudentProfile,
    SubmissionStatus,
)
from eduhub.schemas.gradebook import Gradebook, GradebookAssignment, GradebookStudent, GradeEntry
from eduhub.services.roster import enrolled_students
from eduhub.utils import utcnow


def weighted_average(grades: Iterable[Grade | GradeEntry]) -> float:
    """
    Percentage across all graded work, weighted by points:
    sum(score) / sum(max_points) * 100. No graded work gives 0.
    """
    total_score = 0.0
    total_max = 0.0
    for grade in grades:
        total_score += grade.score
        total_max += grade.max_points
    if total_max <= 0:
        return 0.0
    return round(total_score / total_max * 100, 2)


def class_assignments(session: Session, class_id: int) -> list[Assignment]:
    return (
        session.query(Assignment)
        .join(AssignmentClass, AssignmentClass.assignment_id == Assignment.id)
        .filter(AssignmentClass.class_id == class_id)
        .order_by(Assignment.due_date.desc())
        .all()
    )


def compute_gradebook(session: Session, class_id: int) -> Gradebook:
    if session.get(SchoolClass, class_id) is None:
        raise NotFound("Class not found")

    assignments = class_assignments(session, class_id)
    titles = {a.id: a.title for a in assignments}
    students = enrolled_students(session, class_id)

    grades_by_student: dict[int, list[GradeEntry]] = {s.id: [] for s in students}
    if students and titles:
        rows = (
            session.query(Grade)
            .filter(
                Grade.student_id.in_(list(grades_by_student)),
                Grade.assignment_id.in_(list(titles)),
            )
            .order_by(Grade.graded_at.desc())
            .all()
        )
        for g in rows:
            grades_by_student[g.student_id].append(GradeEntry(
                assignment_id=g.assignment_id,
                assignment_title=titles[g.assignment_id],
                score=g.score,
                max_points=g.max_points,
                percentage=g.percentage,
            ))

    return Gradebook(
        assignments=[
            GradebookAssignment(id=a.id, title=a.title, due_date=a.due_date, points=a.points)
            for a in assignments
        ],
        students=[
            GradebookStudent(
                id=s.id,
                name=s.name,
                student_code=s.student_code,
                average=weighted_average(grades_by_student[s.id]),
                grades=grades_by_student[s.id],
            )
            for s in students
        ],
    )


def record_grade(session: Session, teacher_id: int, assignment_id: int, student_id: int, score: float) -> Grade:
    """
    Create or overwrite a student's grade. The teacher must teach a class the
    assignment is linked to and in which the student is enrolled.
    """
    assignment = session.get(Assignment, assignment_id)
    if assignment is None:
        raise NotFound("Assignment not found")
    if session.get(StudentProfile, student_id) is None:
        raise NotFound("Student not found")

    shared_class = (
        session.query(AssignmentClass.class_id)
        .join(ClassTeacher, ClassTeacher.class_id == AssignmentClass.class_id)
        .join(ClassEnrollment, ClassEnrollment.class_id == AssignmentClass.class_id)
        .filter(
            AssignmentClass.assignment_id == assignment_id,
            ClassTeacher.teacher_id == teacher_id,
            ClassEnrollment.student_id == student_id,
        )
        .first()
    )
    if shared_class is None:
        raise Forbidden("You do not teach this student for this assignment")

    grade = (
        session.query(Grade)
        .filter(Grade.student_id == student_id, Grade.assignment_id == assignment_id)
        .first()
    )
    if grade is None:
        grade = Grade(student_id=student_id, assignment_id=assignment_id)
        session.add(grade)
    grade.set_score(score, assignment.points)
    grade.graded_at = utcnow()
    grade.graded_by_id = teacher_id

    stub = (
        session.query(StudentAssignment)
        .filter(StudentAssignment.assignment_id == assignment_id, StudentAssignment.student_id == student_id)
        .first()
    )
    if stub is None:
        stub = StudentAssignment(assignment_id=assignment_id, student_id=student_id)
        session.add(stub)
    stub.status = SubmissionStatus.GRADED

    session.commit()
    return grade
