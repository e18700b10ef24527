import logging
from dataclasses import asdict
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from gradebook.config import settings
from gradebook.schemas.gradebook import (
    BreakdownRequest,
    WeightedBreakdownRequest,
    StatisticsRequest,
    RosterRequest,
    GradeBreakdownResponse,
    WeightedBreakdownResponse,
    GradeStatisticsResponse,
    RosterResponse,
)
from gradebook.services.gradebook import (
    GradingPolicy,
    calculate_grade_breakdown,
    calculate_weighted_breakdown,
    get_grade_statistics,
)
from gradebook.services.roster import (
    StudentGrades,
    build_roster_gradebook,
    summarize_roster,
    export_roster_csv,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gradebook", tags=["gradebook"])


def get_grading_policy() -> GradingPolicy:
    """Grading policy for the deployment, built from settings."""
    try:
        return settings.grading_policy()
    except ValueError as e:
        logger.error("Invalid grading policy configuration: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Grading policy is misconfigured"
        )


def _to_students(request: RosterRequest) -> list[StudentGrades]:
    return [
        StudentGrades(
            student_id=s.student_id,
            name=s.name,
            assignments=[item.to_grade_item("assignment") for item in s.assignments],
            quizzes=[item.to_grade_item("quiz") for item in s.quizzes],
        )
        for s in request.students
    ]


@router.post("/breakdown", response_model=GradeBreakdownResponse)
def grade_breakdown(
    request: BreakdownRequest,
    policy: GradingPolicy = Depends(get_grading_policy)
):
    """
    Calculate one student's grade breakdown.

    Assignments and quizzes are graded separately, then combined using the
    configured weights. Categories without items do not count.
    """
    breakdown = calculate_grade_breakdown(
        [item.to_grade_item("assignment") for item in request.assignments],
        [item.to_grade_item("quiz") for item in request.quizzes],
        passing_threshold=request.passing_threshold,
        policy=policy,
    )

    logger.info(
        "Graded %d assignments and %d quizzes: %d%% (%s)",
        len(request.assignments),
        len(request.quizzes),
        breakdown.overall.percentage,
        breakdown.overall.letter,
    )
    return asdict(breakdown)


@router.post("/weighted", response_model=WeightedBreakdownResponse)
def weighted_breakdown(request: WeightedBreakdownRequest):
    """
    Calculate a grade breakdown over arbitrary weighted categories.

    Weights must sum to 1.0.
    """
    try:
        policy = GradingPolicy(
            category_weights={c.name: c.weight for c in request.categories},
            passing_threshold=request.passing_threshold,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    breakdown = calculate_weighted_breakdown(
        {c.name: [item.to_grade_item("assignment") for item in c.items] for c in request.categories},
        policy,
    )
    return asdict(breakdown)


@router.post("/statistics", response_model=GradeStatisticsResponse)
def grade_statistics(request: StatisticsRequest):
    """Class statistics from one overall percentage per student."""
    return asdict(get_grade_statistics(request.percentages, request.passing_threshold))


@router.post("/roster", response_model=RosterResponse)
def roster_gradebook(
    request: RosterRequest,
    policy: GradingPolicy = Depends(get_grading_policy)
):
    """
    Gradebook for a whole class.

    Returns every student's breakdown, best overall grade first, with class
    statistics.
    """
    rows = build_roster_gradebook(_to_students(request), policy)

    return {
        "students": [asdict(row) for row in rows],
        "statistics": asdict(summarize_roster(rows, policy)),
    }


@router.post("/roster/export")
def export_roster(
    request: RosterRequest,
    policy: GradingPolicy = Depends(get_grading_policy)
):
    """
    Export a class gradebook as CSV.

    Returns a CSV file with one line per student, best overall grade first.
    """
    rows = build_roster_gradebook(_to_students(request), policy)
    logger.info("Exported gradebook for %d students", len(rows))

    return StreamingResponse(
        iter([export_roster_csv(rows)]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename=gradebook_{datetime.now().strftime('%Y%m%d')}.csv"
        }
    )
