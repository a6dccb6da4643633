"""
Product catalog API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.db import Database, StoreError
from core.dependencies import get_db

from . import repository

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/produtos")
async def list_products(db: Database = Depends(get_db)):
    try:
        return await repository.list_products(db)
    except StoreError:
        logger.exception("list_products_failed")
        return JSONResponse(status_code=500, content={"error": "Erro ao buscar produtos."})


@router.get("/produtos/categoria/{categoria}")
async def list_products_by_category(categoria: str, db: Database = Depends(get_db)):
    try:
        return await repository.list_products_by_category(db, categoria)
    except StoreError:
        logger.exception("list_products_by_category_failed categoria=%s", categoria)
        return JSONResponse(
            status_code=500,
            content={"error": "Erro ao buscar produtos por categoria."},
        )
