"""Gateway HTTP API.

Two triggers relay to Telegram:
- ``GET /`` reports the inbound request itself (monitoring ping)
- ``POST /send`` delivers an authenticated custom notification

Delivery failures map to 502 so callers can tell an upstream outage apart
from validation (400) or authorization (403) problems.
"""

from __future__ import annotations

import asyncio
import secrets

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)

from pingwire.channels.base import BaseTransport
from pingwire.channels.telegram import TelegramTransport
from pingwire.config.schema import Config
from pingwire.delivery.models import DeliveryResult
from pingwire.delivery.pipeline import DeliveryPipeline, Sleep
from pingwire.gateway.request_info import api_response, client_ip, extract_request_info

MAX_NOTIFICATION_LENGTH = 50_000
AUTH_KEY_MIN_LENGTH = 25
AUTH_KEY_MAX_LENGTH = 44


class NotificationRequest(BaseModel):
    """Body of ``POST /send``."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    auth_key: str = Field(alias="authKey")

    @field_validator("message")
    @classmethod
    def _check_message(cls, v: str) -> str:
        if len(v) < 1:
            raise ValueError("Message cannot be empty")
        if len(v) > MAX_NOTIFICATION_LENGTH:
            raise ValueError("Message too long")
        return v

    @field_validator("auth_key")
    @classmethod
    def _check_auth_key(cls, v: str) -> str:
        if len(v) < AUTH_KEY_MIN_LENGTH:
            raise ValueError("Auth key too short")
        if len(v) > AUTH_KEY_MAX_LENGTH:
            raise ValueError("Auth key too long")
        return v


def _validation_message(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one line, e.g. ``authKey: Auth key too short``."""
    parts: list[str] = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        msg = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def _is_authorized(provided: str, expected: str) -> bool:
    if not expected:
        return False
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def _delivery_failed(result: DeliveryResult) -> JSONResponse:
    return JSONResponse(
        api_response(False, error=result.error or "Delivery failed"),
        status_code=HTTP_502_BAD_GATEWAY,
    )


def create_gateway_app(
    config: Config,
    transport: BaseTransport | None = None,
    sleep: Sleep | None = None,
) -> FastAPI:
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.gateway.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    transport = transport or TelegramTransport(config.telegram)
    pipeline = DeliveryPipeline(transport, config.delivery_settings, sleep=sleep or asyncio.sleep)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            api_response(False, error=_validation_message(exc)),
            status_code=HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == HTTP_404_NOT_FOUND:
            return JSONResponse(
                api_response(False, error="Endpoint not found"),
                status_code=HTTP_404_NOT_FOUND,
            )
        return JSONResponse(
            api_response(False, error=str(exc.detail)),
            status_code=exc.status_code,
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            api_response(False, error="Internal server error"),
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"ok": True})

    @app.get("/")
    async def report_request(request: Request) -> JSONResponse:
        """Send the inbound request's details to Telegram."""
        result = await pipeline.deliver(extract_request_info(request), config.credentials)
        if not result.success:
            return _delivery_failed(result)
        return JSONResponse(
            api_response(
                True,
                message="Request information sent successfully",
                data={"parts": result.sent_parts or 1},
            )
        )

    @app.post("/send")
    async def send_notification(request: Request, body: NotificationRequest) -> JSONResponse:
        """Deliver a custom notification, followed by the request's details."""
        if not _is_authorized(body.auth_key, config.gateway.auth_key):
            logger.warning(f"Rejected /send with invalid auth key from {client_ip(request)}")
            return JSONResponse(
                api_response(False, error="Unauthorized: Invalid auth key"),
                status_code=HTTP_403_FORBIDDEN,
            )

        combined = f"{body.message}\n\n---\nRequest Info:\n{extract_request_info(request)}"
        result = await pipeline.deliver(combined, config.credentials)
        if not result.success:
            return _delivery_failed(result)
        return JSONResponse(
            api_response(
                True,
                message="Notification sent successfully",
                data={"parts": result.sent_parts or 1, "messageLength": len(combined)},
            )
        )

    return app
