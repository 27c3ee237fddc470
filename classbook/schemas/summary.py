from pydantic import BaseModel, Field
from typing import Annotated, Dict, List, Literal, Optional

OutcomeLabel = Literal["Excellent", "Complete", "Incomplete", "Undetermined"]


class TopicSummary(BaseModel):
    topic_id: int
    topic_name: str
    criteria_count: int
    completed_count: int
    average_rating: float
    progress: float
    rating_label: str


class StudentSummary(BaseModel):
    student_id: int
    student_name: str
    computer_name: Optional[str] = None
    topics: List[TopicSummary]
    overall_average: float
    outcome: OutcomeLabel


class CriterionColumn(BaseModel):
    id: int
    name: str


class StudentCriteriaRow(BaseModel):
    student_id: int
    student_name: str
    computer_name: Optional[str] = None
    criteria_ratings: Dict[int, float]
    total_average: float
    outcome: OutcomeLabel


class CriteriaMatrix(BaseModel):
    topic_id: int
    topic_name: str
    criteria: List[CriterionColumn]
    students: List[StudentCriteriaRow]


class ClassifyRequest(BaseModel):
    averages: List[Annotated[float, Field(ge=0, le=4)]]


class ClassifyResponse(BaseModel):
    outcome: OutcomeLabel


class RatingLevel(BaseModel):
    value: int
    label: str
