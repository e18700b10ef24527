from .gradebook import (
    DEFAULT_POLICY,
    CategoryBreakdown,
    GradeBgColor,
    GradeBreakdown,
    GradeColor,
    GradeItem,
    GradeStatistics,
    GradingPolicy,
    OverallGrade,
    WeightedBreakdown,
    calculate_class_average,
    calculate_grade_breakdown,
    calculate_percentage,
    calculate_weighted_breakdown,
    format_grade,
    format_percentage,
    get_grade_bg_color,
    get_grade_color,
    get_grade_statistics,
    get_letter_grade,
    round_half_up,
)
from .roster import RosterRow, StudentGrades, build_roster_gradebook, export_roster_csv, summarize_roster

__all__ = [
    "DEFAULT_POLICY",
    "CategoryBreakdown",
    "GradeBgColor",
    "GradeBreakdown",
    "GradeColor",
    "GradeItem",
    "GradeStatistics",
    "GradingPolicy",
    "OverallGrade",
    "WeightedBreakdown",
    "calculate_class_average",
    "calculate_grade_breakdown",
    "calculate_percentage",
    "calculate_weighted_breakdown",
    "format_grade",
    "format_percentage",
    "get_grade_bg_color",
    "get_grade_color",
    "get_grade_statistics",
    "get_letter_grade",
    "round_half_up",
    "RosterRow",
    "StudentGrades",
    "build_roster_gradebook",
    "export_roster_csv",
    "summarize_roster",
]
