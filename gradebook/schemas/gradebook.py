from pydantic import BaseModel, Field, field_validator
from typing import Annotated, Optional, List, Dict, Literal, Union
from datetime import datetime

from gradebook.services.gradebook import GradeItem


class GradeItemSchema(BaseModel):
    """Schema for one graded assignment submission or quiz attempt"""
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    score: float = Field(..., ge=0, allow_inf_nan=False)
    max_points: float = Field(..., ge=0, allow_inf_nan=False)
    type: Optional[Literal["assignment", "quiz"]] = None
    graded_at: Optional[datetime] = None

    def to_grade_item(self, default_type: Literal["assignment", "quiz"]) -> GradeItem:
        return GradeItem(
            id=self.id,
            title=self.title,
            score=self.score,
            max_points=self.max_points,
            type=self.type or default_type,
            graded_at=self.graded_at,
        )


class BreakdownRequest(BaseModel):
    """Schema for grading one student on assignments and quizzes"""
    assignments: List[GradeItemSchema] = []
    quizzes: List[GradeItemSchema] = []
    passing_threshold: Optional[float] = Field(None, ge=0.0, le=100.0, allow_inf_nan=False)


class CategoryRequest(BaseModel):
    """A named category with its weight and graded items"""
    name: str = Field(..., min_length=1, max_length=100)
    weight: float = Field(..., ge=0.0, le=1.0)
    items: List[GradeItemSchema] = []

    @field_validator('name')
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Category name is required')
        return v.strip()


class WeightedBreakdownRequest(BaseModel):
    """Schema for grading one student on arbitrary weighted categories"""
    categories: List[CategoryRequest] = Field(..., min_length=1)
    passing_threshold: float = Field(60.0, ge=0.0, le=100.0, allow_inf_nan=False)

    @field_validator('categories')
    @classmethod
    def category_names_unique(cls, v: List[CategoryRequest]) -> List[CategoryRequest]:
        names = [c.name for c in v]
        if len(names) != len(set(names)):
            raise ValueError('Category names must be unique')
        return v


class StatisticsRequest(BaseModel):
    """Schema for class statistics over overall percentages"""
    percentages: List[Annotated[float, Field(allow_inf_nan=False)]] = []
    passing_threshold: float = Field(60.0, ge=0.0, le=100.0, allow_inf_nan=False)


class StudentGradesSchema(BaseModel):
    """One student's graded work in a class"""
    student_id: str = Field(..., min_length=1)
    name: str = ""
    assignments: List[GradeItemSchema] = []
    quizzes: List[GradeItemSchema] = []


class RosterRequest(BaseModel):
    """Schema for grading a whole class"""
    students: List[StudentGradesSchema] = []


class GradeItemResponse(BaseModel):
    id: str
    title: str
    score: float
    max_points: float
    type: Literal["assignment", "quiz"]
    graded_at: Optional[datetime] = None


class CategoryBreakdownResponse(BaseModel):
    weight: float
    items: List[GradeItemResponse]
    total_score: float
    total_max_points: float
    percentage: float


class OverallGradeResponse(BaseModel):
    percentage: Union[int, float]
    letter: str
    status: Literal["passing", "failing"]


class GradeBreakdownResponse(BaseModel):
    """Schema for a student's grade breakdown"""
    assignments: CategoryBreakdownResponse
    quizzes: CategoryBreakdownResponse
    overall: OverallGradeResponse


class WeightedBreakdownResponse(BaseModel):
    """Schema for a breakdown over named categories"""
    categories: Dict[str, CategoryBreakdownResponse]
    overall: OverallGradeResponse


class GradeStatisticsResponse(BaseModel):
    """Schema for class statistics"""
    average: Union[int, float]
    highest: float
    lowest: float
    median: float
    passing_count: int
    failing_count: int


class StudentSummary(BaseModel):
    student_id: str
    name: str


class RosterRowResponse(BaseModel):
    student: StudentSummary
    breakdown: GradeBreakdownResponse


class RosterResponse(BaseModel):
    """Schema for a class gradebook, best overall grade first"""
    students: List[RosterRowResponse]
    statistics: GradeStatisticsResponse
