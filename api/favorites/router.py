"""
Favoriting API endpoint.

This route always answers 200; failures are reported in the body with
`sucesso: false`. The body is parsed by hand so malformed JSON or wrongly
typed ids also get that answer instead of FastAPI's 422.

Responses carry both the Portuguese keys the frontend reads
(`sucesso`, `favorito`, `mensagem`) and their English twins.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from core.bodies import parse_json_object
from core.db import Database, StoreError
from core.dependencies import get_db
from core.errors import ValidationError

from . import schemas, service

logger = logging.getLogger(__name__)

router = APIRouter()


def _failure(message: str) -> dict:
    return {"sucesso": False, "mensagem": message, "success": False, "message": message}


@router.post("/favoritos")
async def toggle_favorite(request: Request, db: Database = Depends(get_db)) -> dict:
    try:
        payload = await parse_json_object(
            request,
            schemas.ToggleFavoriteRequest,
            message=service.INCOMPLETE_MESSAGE,
        )
        favorited = await service.toggle_favorite(db, payload)
    except ValidationError as exc:
        return _failure(str(exc))
    except StoreError:
        logger.exception("toggle_favorite_failed")
        return _failure("Erro ao atualizar favorito.")
    return {"sucesso": True, "favorito": favorited, "success": True, "favorite": favorited}
