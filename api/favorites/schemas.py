"""
Pydantic schemas for the favoriting endpoint.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field


class ToggleFavoriteRequest(BaseModel):
    product_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("produtoId", "productId", "produto_id"),
    )
    user_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("usuarioId", "userId", "usuario_id"),
    )
