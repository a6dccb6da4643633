from __future__ import annotations

import asyncio

from products import repository


def test_list_products_returns_whole_catalog(client, products) -> None:
    response = client.get("/produtos")

    assert response.status_code == 200
    assert response.json() == products


def test_category_filter_is_exact_subset(client, products) -> None:
    response = client.get("/produtos/categoria/roupas")

    assert response.status_code == 200
    expected = [p for p in products if p["categoria"] == "roupas"]
    assert response.json() == expected


def test_category_all_matches_unfiltered_list(client) -> None:
    everything = client.get("/produtos").json()
    response = client.get("/produtos/categoria/all")

    assert response.status_code == 200
    assert response.json() == everything


def test_unknown_category_is_empty(client) -> None:
    response = client.get("/produtos/categoria/brinquedos")

    assert response.status_code == 200
    assert response.json() == []


def test_category_travels_as_bound_argument(client, db) -> None:
    hostile = "x' OR '1'='1"
    response = client.get(f"/produtos/categoria/{hostile}")

    assert response.status_code == 200
    assert response.json() == []
    sql, args = db.calls[-1]
    assert sql == repository.SELECT_PRODUCTS_BY_CATEGORY
    assert args == (hostile,)
    assert hostile not in sql


def test_store_failure_maps_to_generic_500(client, db) -> None:
    db.fail = True

    response = client.get("/produtos")
    assert response.status_code == 500
    assert response.json() == {"error": "Erro ao buscar produtos."}

    response = client.get("/produtos/categoria/casa")
    assert response.status_code == 500
    assert "connection refused" not in response.json()["error"]


def test_repository_category_property(db, products) -> None:
    everything = asyncio.run(repository.list_products(db))
    for category in {p["categoria"] for p in products}:
        subset = asyncio.run(repository.list_products_by_category(db, category))
        assert subset == [p for p in everything if p["categoria"] == category]
    assert asyncio.run(repository.list_products_by_category(db, "all")) == everything
