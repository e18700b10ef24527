"""Gradebook calculation utilities.

Turns graded assignment and quiz records into weighted category breakdowns,
an overall percentage with letter grade and pass/fail status, and cohort
statistics. Everything here is pure: callers fetch the records, these
functions only do arithmetic over them.
"""
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Literal, Mapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)

ASSIGNMENTS = "assignments"
QUIZZES = "quizzes"

DEFAULT_ASSIGNMENT_WEIGHT = 0.6
DEFAULT_QUIZ_WEIGHT = 0.4
DEFAULT_PASSING_THRESHOLD = 60.0

# Weights are compared with the same tolerance exercises use for test/LLM weights
WEIGHT_TOLERANCE = 0.01

# Ordered, first match wins
LETTER_CUTOFFS = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)


class GradeColor(str, Enum):
    """Text emphasis for a percentage"""
    EXCELLENT = "excellent"
    GOOD = "good"
    POOR = "poor"


class GradeBgColor(str, Enum):
    """Background emphasis for a percentage"""
    EXCELLENT = "excellent-bg"
    GOOD = "good-bg"
    POOR = "poor-bg"


@dataclass(frozen=True)
class GradeItem:
    id: str
    title: str
    score: float
    max_points: float
    type: Literal["assignment", "quiz"]
    graded_at: Optional[datetime] = None


@dataclass(frozen=True)
class CategoryBreakdown:
    weight: float
    items: List[GradeItem]
    total_score: float
    total_max_points: float
    percentage: float


@dataclass(frozen=True)
class OverallGrade:
    percentage: Union[int, float]
    letter: str
    status: Literal["passing", "failing"]


@dataclass(frozen=True)
class GradeBreakdown:
    assignments: CategoryBreakdown
    quizzes: CategoryBreakdown
    overall: OverallGrade


@dataclass(frozen=True)
class WeightedBreakdown:
    categories: Dict[str, CategoryBreakdown]
    overall: OverallGrade


@dataclass(frozen=True)
class GradeStatistics:
    average: Union[int, float]
    highest: float
    lowest: float
    median: float
    passing_count: int
    failing_count: int


@dataclass(frozen=True)
class GradingPolicy:
    """
    Category weights and passing threshold used to grade a class.

    Raises ValueError when the weights are negative or do not sum to 1,
    or when the threshold falls outside 0-100.
    """
    category_weights: Mapping[str, float] = field(
        default_factory=lambda: {
            ASSIGNMENTS: DEFAULT_ASSIGNMENT_WEIGHT,
            QUIZZES: DEFAULT_QUIZ_WEIGHT,
        }
    )
    passing_threshold: float = DEFAULT_PASSING_THRESHOLD

    def __post_init__(self):
        weights = dict(self.category_weights)
        if not weights:
            raise ValueError("At least one category weight is required")

        for name, weight in weights.items():
            if weight < 0:
                raise ValueError(f"Weight for category '{name}' must not be negative")

        if abs(sum(weights.values()) - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError("Category weights must sum to 1.0")

        if not 0 <= self.passing_threshold <= 100:
            raise ValueError("Passing threshold must be between 0 and 100")

        object.__setattr__(self, "category_weights", MappingProxyType(weights))

    @classmethod
    def from_weights(
        cls,
        assignment_weight: float = DEFAULT_ASSIGNMENT_WEIGHT,
        quiz_weight: float = DEFAULT_QUIZ_WEIGHT,
        passing_threshold: float = DEFAULT_PASSING_THRESHOLD,
    ) -> "GradingPolicy":
        return cls(
            category_weights={ASSIGNMENTS: assignment_weight, QUIZZES: quiz_weight},
            passing_threshold=passing_threshold,
        )

    def weight_for(self, category: str) -> float:
        try:
            return self.category_weights[category]
        except KeyError:
            raise ValueError(f"No weight configured for category '{category}'") from None


DEFAULT_POLICY = GradingPolicy()


def round_half_up(value: float) -> Union[int, float]:
    """
    Round to the nearest integer, .5 always going up (67.5 -> 68, 84.5 -> 85).

    Infinity and NaN come back unchanged.
    """
    if not math.isfinite(value):
        return value
    # Weighting leaves float noise such as 59.49999999999999 for 59.5
    return math.floor(round(value, 9) + 0.5)


def calculate_percentage(score: float, max_points: float) -> float:
    """Calculate percentage from score and max points, 0 when nothing is achievable."""
    if max_points == 0:
        return 0.0
    return (score / max_points) * 100.0


def get_letter_grade(percentage: float) -> str:
    for cutoff, letter in LETTER_CUTOFFS:
        if percentage >= cutoff:
            return letter
    return "F"


def _grade_tier(percentage: float) -> str:
    if percentage >= 80:
        return "excellent"
    if percentage >= 60:
        return "good"
    return "poor"


def get_grade_color(percentage: float) -> GradeColor:
    return GradeColor(_grade_tier(percentage))


def get_grade_bg_color(percentage: float) -> GradeBgColor:
    return GradeBgColor(f"{_grade_tier(percentage)}-bg")


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_grade(score: Optional[float], max_points: float) -> str:
    """Render a score as 'score/max', or '-' when the work is not graded yet."""
    if score is None:
        return "-"
    return f"{_format_number(score)}/{_format_number(max_points)}"


def format_percentage(percentage: float) -> str:
    return f"{round_half_up(percentage)}%"


def calculate_category_stats(items: Sequence[GradeItem], weight: float) -> CategoryBreakdown:
    """Sum scores and max points for one category."""
    total_score = sum(item.score for item in items)
    total_max_points = sum(item.max_points for item in items)

    if items and total_max_points == 0:
        logger.debug("Category has %d graded items but no achievable points", len(items))

    return CategoryBreakdown(
        weight=weight,
        items=list(items),
        total_score=total_score,
        total_max_points=total_max_points,
        percentage=calculate_percentage(total_score, total_max_points),
    )


def calculate_overall_grade(
    categories: Mapping[str, CategoryBreakdown],
    passing_threshold: float = DEFAULT_PASSING_THRESHOLD,
) -> OverallGrade:
    """
    Combine category percentages into the overall grade.

    Only categories with at least one item count, and their weights are
    renormalized so a student graded on quizzes alone is scored on quizzes
    alone. A category whose items are all worth zero points still counts,
    at 0%.
    """
    present = [c for c in categories.values() if c.items]
    present_weight = sum(c.weight for c in present)

    weighted = 0.0
    if present_weight > 0:
        weighted = sum(c.percentage * c.weight for c in present) / present_weight

    percentage = round_half_up(weighted)
    return OverallGrade(
        percentage=percentage,
        letter=get_letter_grade(percentage),
        status="passing" if percentage >= passing_threshold else "failing",
    )


def calculate_weighted_breakdown(
    categories: Mapping[str, Sequence[GradeItem]],
    policy: GradingPolicy = DEFAULT_POLICY,
) -> WeightedBreakdown:
    """
    Grade any number of named categories against a policy.

    Args:
        categories: Ordered mapping of category name to its graded items
        policy: Weights for every category name and the passing threshold

    Raises ValueError if a category has no weight in the policy.
    """
    breakdowns = {
        name: calculate_category_stats(items, policy.weight_for(name))
        for name, items in categories.items()
    }
    return WeightedBreakdown(
        categories=breakdowns,
        overall=calculate_overall_grade(breakdowns, policy.passing_threshold),
    )


def calculate_grade_breakdown(
    assignment_items: Sequence[GradeItem],
    quiz_items: Sequence[GradeItem],
    passing_threshold: Optional[float] = None,
    policy: GradingPolicy = DEFAULT_POLICY,
) -> GradeBreakdown:
    """Calculate the assignment/quiz breakdown and overall grade for one student."""
    if passing_threshold is None:
        passing_threshold = policy.passing_threshold

    assignments = calculate_category_stats(assignment_items, policy.weight_for(ASSIGNMENTS))
    quizzes = calculate_category_stats(quiz_items, policy.weight_for(QUIZZES))

    return GradeBreakdown(
        assignments=assignments,
        quizzes=quizzes,
        overall=calculate_overall_grade(
            {ASSIGNMENTS: assignments, QUIZZES: quizzes},
            passing_threshold,
        ),
    )


def calculate_class_average(percentages: Sequence[float]) -> float:
    if not percentages:
        return 0.0
    return sum(percentages) / len(percentages)


def _median(values: Sequence[float]) -> float:
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]


def get_grade_statistics(
    percentages: Sequence[float],
    passing_threshold: float = DEFAULT_PASSING_THRESHOLD,
) -> GradeStatistics:
    """Aggregate overall percentages (one per student) into class statistics."""
    if not percentages:
        return GradeStatistics(
            average=0,
            highest=0,
            lowest=0,
            median=0,
            passing_count=0,
            failing_count=0,
        )

    passing_count = sum(1 for p in percentages if p >= passing_threshold)
    return GradeStatistics(
        average=round_half_up(calculate_class_average(percentages)),
        highest=max(percentages),
        lowest=min(percentages),
        median=_median(percentages),
        passing_count=passing_count,
        failing_count=len(percentages) - passing_count,
    )
