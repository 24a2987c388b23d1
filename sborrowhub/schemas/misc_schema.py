from datetime import date
from typing import Literal, Optional

from pydantic import EmailStr, Field

from sborrowhub.schemas.base import RequestSchema


class ContactMessageCreate(RequestSchema):
    name: str = Field(min_length=1)
    email: EmailStr
    subject: str = Field(min_length=1)
    message: str = Field(min_length=10)


class ContactReplyCreate(RequestSchema):
    message: str = Field(min_length=1)


class ContactStatusUpdate(RequestSchema):
    status: Literal["new", "in_progress", "resolved"]


class ReviewCreate(RequestSchema):
    borrow_request_id: int = Field(gt=0)
    rating: int = Field(ge=1, le=5)
    comment: str = ""


class CartAdd(RequestSchema):
    item_id: int = Field(gt=0)
    quantity: int = Field(default=1, gt=0)
    borrow_days: int = Field(default=7, ge=1, le=30)


class CartUpdate(RequestSchema):
    quantity: Optional[int] = Field(default=None, gt=0)
    borrow_days: Optional[int] = Field(default=None, ge=1, le=30)


class CartCheckout(RequestSchema):
    purpose: str = Field(min_length=1)
    start_date: Optional[date] = None
    notes: str = ""
