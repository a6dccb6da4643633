"""
Rating API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import JSONResponse

from core.bodies import parse_json_object
from core.db import MAX_INT_ID, Database, StoreError
from core.dependencies import get_db
from core.errors import ValidationError

from . import schemas, service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/avaliacoes")
async def create_rating(request: Request, db: Database = Depends(get_db)):
    try:
        payload = await parse_json_object(
            request,
            schemas.CreateRatingRequest,
            message=service.INCOMPLETE_MESSAGE,
        )
        await service.create_rating(db, payload)
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except StoreError:
        logger.exception(
            "create_rating_failed product_id=%s user_id=%s",
            payload.product_id,
            payload.user_id,
        )
        return JSONResponse(status_code=500, content={"error": "Erro ao salvar avaliação."})
    return {"message": "Avaliação salva com sucesso!"}


@router.get("/avaliacoes/{produto_id}")
async def list_ratings(
    produto_id: int = Path(..., le=MAX_INT_ID),
    db: Database = Depends(get_db),
):
    try:
        return await service.product_ratings(db, produto_id)
    except StoreError:
        logger.exception("list_ratings_failed product_id=%s", produto_id)
        return JSONResponse(status_code=500, content={"error": "Erro ao buscar avaliações."})


@router.delete("/avaliacoes/{avaliacao_id}")
async def delete_rating(
    avaliacao_id: int = Path(..., le=MAX_INT_ID),
    db: Database = Depends(get_db),
):
    try:
        removed = await service.remove_rating(db, avaliacao_id)
    except StoreError:
        logger.exception("delete_rating_failed rating_id=%s", avaliacao_id)
        return JSONResponse(status_code=500, content={"error": "Erro ao excluir avaliação."})
    if not removed:
        return JSONResponse(status_code=404, content={"message": "Avaliação não encontrada."})
    return {"message": "Avaliação excluída com sucesso!"}
