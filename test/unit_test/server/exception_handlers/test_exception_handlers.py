"""
Unit tests for server exception handlers.

Tests cover the mapping of domain errors, request validation failures,
framework HTTP errors, persistence failures and unexpected exceptions onto
the ``{error, message}`` response body.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel
from sqlalchemy.exc import OperationalError

from quotely.core.errors import Conflict, Forbidden, InvalidTransition, NotFound
from quotely.server.exception_handlers import setup_exception_handlers
from quotely.server.exception_handlers.global_handler import global_exception_handler


class Payload(BaseModel):
    count: int


@pytest.fixture
def handler_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/not-found")
    async def not_found():
        raise NotFound("Content item", 9)

    @app.get("/forbidden")
    async def forbidden():
        raise Forbidden("moderate content")

    @app.get("/conflict")
    async def conflict():
        raise Conflict("Email already registered")

    @app.get("/transition")
    async def transition():
        raise InvalidTransition("approved", "rejected")

    @app.post("/payload")
    async def payload(body: Payload):
        return {"count": body.count}

    @app.get("/database")
    async def database():
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internal detail")

    return app


@pytest.fixture
async def handler_client(handler_app: FastAPI):
    transport = ASGITransport(app=handler_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://localhost") as client:
        yield client


class TestDomainErrors:
    @pytest.mark.parametrize(
        ("path", "status_code", "kind"),
        [
            ("/not-found", 404, "NotFound"),
            ("/forbidden", 403, "Forbidden"),
            ("/conflict", 409, "Conflict"),
            ("/transition", 400, "InvalidTransition"),
        ],
    )
    async def test_domain_error_mapped_to_status(self, handler_client, path, status_code, kind):
        response = await handler_client.get(path)

        assert response.status_code == status_code
        assert response.json()["error"] == kind

    async def test_message_is_the_error_text(self, handler_client):
        response = await handler_client.get("/not-found")
        assert response.json() == {"error": "NotFound", "message": "Content item 9 not found"}


class TestFrameworkErrors:
    async def test_request_validation_becomes_400(self, handler_client):
        response = await handler_client.post("/payload", json={"count": "many"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "ValidationError"
        assert body["message"].startswith("count:")

    async def test_unknown_route_is_not_found(self, handler_client):
        response = await handler_client.get("/missing")

        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"

    async def test_wrong_method_is_validation_error(self, handler_client):
        response = await handler_client.delete("/not-found")

        assert response.status_code == 405
        assert response.json()["error"] == "ValidationError"


class TestInternalErrors:
    async def test_database_error_hidden(self, handler_client):
        response = await handler_client.get("/database")

        assert response.status_code == 500
        assert response.json() == {"error": "InternalError", "message": "An unexpected error occurred"}

    async def test_unexpected_error_hidden(self, handler_client):
        response = await handler_client.get("/boom")

        assert response.status_code == 500
        assert "secret internal detail" not in response.text
        assert response.json()["error"] == "InternalError"


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    @pytest.fixture
    def mock_request(self):
        """Create a mock request object."""
        request = Mock(spec=Request)
        request.method = "GET"
        request.url.path = "/api/v1/content"
        request.query_params = {}
        request.client = Mock()
        request.client.host = "127.0.0.1"
        return request

    async def test_exception_handler_logs_error(self, mock_request):
        """Test that exception handler logs errors with an error id."""
        exc = ValueError("Test error")

        with patch("quotely.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await global_exception_handler(mock_request, exc)

        mock_logger.error.assert_called_once()
        call_args = mock_logger.error.call_args
        assert "Unhandled exception" in call_args[0][0]
        assert call_args[1]["extra"]["error_type"] == "ValueError"
        assert len(call_args[1]["extra"]["error_id"]) == 32
        assert response.status_code == 500

    async def test_error_id_not_returned_to_client(self, mock_request):
        with patch("quotely.server.exception_handlers.global_handler.logger") as mock_logger:
            response = await global_exception_handler(mock_request, RuntimeError("x"))

        error_id = mock_logger.error.call_args[1]["extra"]["error_id"]
        body = json.loads(response.body)
        assert error_id not in response.body.decode()
        assert body == {"error": "InternalError", "message": "An unexpected error occurred"}

    async def test_request_without_client(self, mock_request):
        mock_request.client = None

        with patch("quotely.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, RuntimeError("x"))

        assert mock_logger.error.call_args[1]["extra"]["client"] == "unknown"
