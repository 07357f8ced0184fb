from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ReviewBase(BaseModel):
    """Review fields supplied by the client. JSON keys are camelCase (`userName`, `toolsUsed`, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: Optional[str] = None
    user_name: Text
    problem_date: datetime
    problem_description: Text
    tools_used: Text
    rating: int = Field(..., ge=1, le=5)
    comment: Text


class ReviewCreateRequest(ReviewBase):
    pass


class Review(ReviewBase):
    id: str
    date: datetime


class ReviewResponse(BaseModel):
    success: bool = True
    message: str
    review: Review


class ReviewListResponse(BaseModel):
    success: bool = True
    reviews: List[Review]
