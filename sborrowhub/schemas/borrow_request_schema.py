from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from sborrowhub.schemas.base import RequestSchema


class BorrowRequestCreate(RequestSchema):
    item_id: int = Field(gt=0)
    quantity: int = Field(gt=0)
    borrow_date: datetime
    return_date: datetime
    purpose: str = Field(min_length=1)
    notes: str = ""


class RequestStatusUpdate(RequestSchema):
    status: Literal["approved", "rejected"]
    rejection_reason: Optional[str] = None


class ReturnUpdate(RequestSchema):
    actual_return_date: Optional[datetime] = None
