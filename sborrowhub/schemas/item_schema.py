from typing import List, Literal, Optional

from pydantic import Field, model_validator

from sborrowhub.schemas.base import RequestSchema

Condition = Literal["Good", "Fair", "Needs Repair"]
ItemStatus = Literal["available", "all_borrowed", "maintenance"]


class ItemCreate(RequestSchema):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: str = Field(default="General", min_length=1)
    image: str = Field(min_length=1)
    quantity: int = Field(ge=0)
    available: Optional[int] = Field(default=None, ge=0)
    tags: List[str] = Field(default_factory=list)
    condition: Condition = "Good"
    max_borrow_days: int = Field(default=30, gt=0)
    minimum_stock: int = Field(default=5, ge=0)

    @model_validator(mode="after")
    def _available_within_quantity(self):
        if self.available is not None and self.available > self.quantity:
            raise ValueError("available cannot exceed quantity")
        return self


class ItemUpdate(RequestSchema):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    image: Optional[str] = Field(default=None, min_length=1)
    quantity: Optional[int] = Field(default=None, ge=0)
    available: Optional[int] = Field(default=None, ge=0)
    status: Optional[ItemStatus] = None
    tags: Optional[List[str]] = None
    condition: Optional[Condition] = None
    max_borrow_days: Optional[int] = Field(default=None, gt=0)
    minimum_stock: Optional[int] = Field(default=None, ge=0)
