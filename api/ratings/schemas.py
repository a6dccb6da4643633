"""
Pydantic schemas for rating endpoints.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field


class CreateRatingRequest(BaseModel):
    # Fields are optional here so an incomplete body reaches the handler and
    # gets the 400 response instead of FastAPI's 422.
    stars: int | None = Field(default=None, validation_alias=AliasChoices("stars", "estrelas"))
    comment: str | None = Field(
        default=None,
        validation_alias=AliasChoices("comment", "comentario"),
    )
    product_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("productId", "produtoId", "product_id"),
    )
    user_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("userId", "usuarioId", "user_id"),
    )


class RatingResponse(BaseModel):
    stars: int
    comment: str
