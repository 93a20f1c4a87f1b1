"""HTTP server exposing the keypair, message, token and transfer endpoints."""

from __future__ import annotations

import argparse
import json
from typing import Any, Callable

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from .helpers import RequestError
from .keypair import generate_keypair
from .message import sign_message, verify_message
from .models import (
    ApiResponse,
    CreateTokenRequest,
    MintTokenRequest,
    RequestParseError,
    SendSolRequest,
    SendTokenRequest,
    SignMessageRequest,
    VerifyMessageRequest,
)
from .tokens import create_token, mint_token
from .transfer import send_sol, send_token

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8084


def _is_json_content_type(value: str) -> bool:
    essence = value.split(";", 1)[0].strip().lower()
    if essence == "application/json":
        return True
    return essence.startswith("application/") and essence.endswith("+json")


def _api_response(response: ApiResponse, status_code: int) -> JSONResponse:
    return JSONResponse(response.to_dict(), status_code=status_code)


def _json_endpoint(request_model: Any, handler: Callable[[Any], Any]):
    async def endpoint(request: Request) -> Response:
        if not _is_json_content_type(request.headers.get("content-type", "")):
            return PlainTextResponse(
                "Expected request with `Content-Type: application/json`",
                status_code=415,
            )
        body = await request.body()
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return PlainTextResponse(
                f"Failed to parse the request body as JSON: {exc}", status_code=400
            )
        try:
            parsed = request_model.from_json(payload)
        except RequestParseError as exc:
            return PlainTextResponse(
                f"Failed to deserialize the JSON body into the target type: {exc}",
                status_code=422,
            )
        try:
            data = handler(parsed)
        except RequestError as exc:
            return _api_response(ApiResponse.failure(exc.message), 400)
        return _api_response(ApiResponse.ok(data), 200)

    return endpoint


async def _keypair_endpoint(request: Request) -> Response:
    return _api_response(ApiResponse.ok(generate_keypair()), 200)


def create_app() -> Starlette:
    """Build the application with every route and a permissive CORS policy."""
    routes = [
        Route("/keypair", _keypair_endpoint, methods=["POST"]),
        Route("/token/create", _json_endpoint(CreateTokenRequest, create_token), methods=["POST"]),
        Route("/token/mint", _json_endpoint(MintTokenRequest, mint_token), methods=["POST"]),
        Route("/message/sign", _json_endpoint(SignMessageRequest, sign_message), methods=["POST"]),
        Route(
            "/message/verify",
            _json_endpoint(VerifyMessageRequest, verify_message),
            methods=["POST"],
        ),
        Route("/send/sol", _json_endpoint(SendSolRequest, send_sol), methods=["POST"]),
        Route("/send/token", _json_endpoint(SendTokenRequest, send_token), methods=["POST"]),
    ]
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["*"],
        )
    ]
    return Starlette(routes=routes, middleware=middleware)


def main(argv=None) -> None:
    """Run the HTTP server."""
    parser = argparse.ArgumentParser(description="Solana HTTP server")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to bind")
    args = parser.parse_args(argv)

    app = create_app()
    print(f"Solana HTTP Server running on http://{args.host}:{args.port}", flush=True)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()