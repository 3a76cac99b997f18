"""Product Schemas — catalog payloads with embedded specs and reviews.

Invariants:
    - ProductCreate requires model_name (non-blank) and price (>= 0); stock >= 0
    - ReviewCreate carries no author: the author always comes from the token
    - ReviewCreate.rating range is checked by core (enforce_catalog), not here,
      so every caller of the store gets the same rule
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductSpecs(BaseModel):
    cpu: str | None = None
    gpu: str | None = None
    ram: str | None = None
    ssd: str | None = None


class ProductCreate(BaseModel):
    """Product creation — admin only."""
    model_name: str = Field(min_length=1, max_length=200)
    category: str | None = Field(None, max_length=100)
    price: float = Field(ge=0)
    stock: int = Field(0, ge=0)
    specs: ProductSpecs = Field(default_factory=ProductSpecs)

    @field_validator("model_name")
    @classmethod
    def strip_model_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("model_name cannot be empty or whitespace")
        return v


class ReviewCreate(BaseModel):
    rating: int
    comment: str = Field("", max_length=2000)


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user: str
    rating: int
    comment: str
    date: datetime


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    model_name: str
    category: str | None
    price: float
    stock: int
    specs: ProductSpecs
    reviews: list[ReviewResponse]


class SuccessResponse(BaseModel):
    success: bool = True
