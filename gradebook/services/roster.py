"""Class-wide gradebook: one breakdown per student plus class statistics."""
import csv
import io
from dataclasses import dataclass, field
from typing import List, Sequence

from gradebook.services.gradebook import (
    DEFAULT_POLICY,
    GradeBreakdown,
    GradeItem,
    GradeStatistics,
    GradingPolicy,
    calculate_grade_breakdown,
    get_grade_statistics,
)


CSV_HEADER = [
    "Student ID",
    "Student Name",
    "Assignments %",
    "Quizzes %",
    "Overall %",
    "Letter",
    "Status",
]


@dataclass(frozen=True)
class StudentGrades:
    student_id: str
    name: str
    assignments: List[GradeItem] = field(default_factory=list)
    quizzes: List[GradeItem] = field(default_factory=list)


@dataclass(frozen=True)
class RosterRow:
    student: StudentGrades
    breakdown: GradeBreakdown


def build_roster_gradebook(
    students: Sequence[StudentGrades],
    policy: GradingPolicy = DEFAULT_POLICY,
) -> List[RosterRow]:
    """Grade every student and order the roster by overall percentage, best first."""
    rows = [
        RosterRow(
            student=student,
            breakdown=calculate_grade_breakdown(
                student.assignments,
                student.quizzes,
                policy=policy,
            ),
        )
        for student in students
    ]
    rows.sort(key=lambda row: row.breakdown.overall.percentage, reverse=True)
    return rows


def summarize_roster(
    rows: Sequence[RosterRow],
    policy: GradingPolicy = DEFAULT_POLICY,
) -> GradeStatistics:
    return get_grade_statistics(
        [row.breakdown.overall.percentage for row in rows],
        passing_threshold=policy.passing_threshold,
    )


def export_roster_csv(rows: Sequence[RosterRow]) -> str:
    """Render the roster as CSV, one line per student."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)

    for row in rows:
        breakdown = row.breakdown
        writer.writerow([
            row.student.student_id,
            row.student.name,
            round(breakdown.assignments.percentage, 2) if breakdown.assignments.items else "",
            round(breakdown.quizzes.percentage, 2) if breakdown.quizzes.items else "",
            breakdown.overall.percentage,
            breakdown.overall.letter,
            breakdown.overall.status,
        ])

    return output.getvalue()
