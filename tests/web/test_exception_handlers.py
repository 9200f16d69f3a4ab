import pytest
from fastapi import FastAPI, HTTPException, Query
from fastapi.testclient import TestClient

from api.middleware import LocaleMiddleware, RequestIDMiddleware
from application.dto import PaginationParams
from core.exceptions import register_exception_handlers
from core.response import ModelPage, paginated_response, success_response
from domain.common.exceptions import (
    NotFoundException,
    PermissionDeniedException,
    UnauthorizedException,
    ValidationException,
)


@pytest.fixture(scope="module")
def client():
    app = FastAPI()
    register_exception_handlers(app)
    app.add_middleware(LocaleMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/ok")
    async def ok():
        return success_response(data={"id": 1}).to_json_dict()

    @app.get("/items")
    async def items(page: int = Query(1), size: int = Query(2)):
        params = PaginationParams(page=page, size=size)
        return paginated_response(["a", "b"], total=5, page=params.page, size=params.size).to_json_dict()

    @app.get("/bad-page")
    async def bad_page():
        return ModelPage.of([], page_number=0, page_size=10, total_count=0)

    @app.get("/missing")
    async def missing():
        raise NotFoundException("article", 42)

    @app.get("/custom")
    async def custom():
        raise ValidationException("title is required", field="title")

    @app.get("/forbidden")
    async def forbidden():
        raise PermissionDeniedException()

    @app.get("/login")
    async def login():
        raise UnauthorizedException()

    @app.get("/teapot")
    async def teapot():
        raise HTTPException(status_code=418, detail="short and stout")

    @app.get("/typed")
    async def typed(n: int):
        return {"n": n}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def test_success_envelope(client):
    resp = client.get("/ok")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"] == {"id": 1}
    assert body["errorCode"] is None
    assert "X-Request-ID" in resp.headers


def test_paginated_envelope(client):
    body = client.get("/items", params={"page": 2, "size": 2}).json()
    assert body["data"] == {"pageNumber": 2, "pageSize": 2, "content": ["a", "b"], "totalCount": 5}


def test_not_found_uses_catalog_message(client):
    resp = client.get("/missing", headers={"X-Request-ID": "req-123"})
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["errorCode"] == "NOT_FOUND"
    assert body["message"] == "Resource not found"
    assert body["details"] == {"resource": "article", "id": "42"}
    assert body["requestId"] == "req-123"


def test_localized_message(client):
    body = client.get("/forbidden", params={"lang": "zh-CN"}).json()
    assert body["errorCode"] == "PERMISSION_ERROR"
    assert body["message"] == "没有权限执行此操作"


def test_explicit_message_is_kept(client):
    resp = client.get("/custom")
    assert resp.status_code == 422
    body = resp.json()
    assert body["errorCode"] == "VALIDATION_ERROR"
    assert body["message"] == "title is required"
    assert body["details"] == {"field": "title"}


def test_unauthorized_sets_www_authenticate(client):
    resp = client.get("/login")
    assert resp.status_code == 401
    assert resp.headers["WWW-Authenticate"] == "Bearer"
    assert resp.json()["errorCode"] == "UNAUTHORIZED"


def test_invalid_page_maps_to_validation_error(client):
    resp = client.get("/bad-page")
    assert resp.status_code == 422
    body = resp.json()
    assert body["errorCode"] == "VALIDATION_ERROR"
    assert body["details"]["errors"]


def test_request_validation_error(client):
    resp = client.get("/typed", params={"n": "abc"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["errorCode"] == "VALIDATION_ERROR"
    assert body["message"].startswith("Validation failed:")


def test_http_exception_mapping(client):
    resp = client.get("/teapot")
    assert resp.status_code == 418
    body = resp.json()
    assert body["errorCode"] == "GENERAL_ERROR"
    assert body["message"] == "short and stout"

    resp = client.get("/no-such-route")
    assert resp.status_code == 404
    assert resp.json()["errorCode"] == "NOT_FOUND"


def test_unhandled_exception_is_system_error(client):
    resp = client.get("/boom")
    assert resp.status_code == 500
    body = resp.json()
    assert body["errorCode"] == "SYSTEM_ERROR"
    assert body["message"] == "Internal server error"
    assert body["details"] is None
