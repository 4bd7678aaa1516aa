"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data and sends one structured event per request
to Axiom. Logs: API endpoint, method, data (body/params), status code,
duration, error reason. Sensitive fields are masked and long values (such
as base64 image payloads) are truncated.
"""

import json
import logging
import re
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp
from axiom_py import Client as AxiomClient

from app.config import Settings

# 마스킹 대상 필드 패턴 — Fields to mask in request/response bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 문자열 최대 길이 — Max length of a logged string value (image data is base64)
_MAX_VALUE_LEN = 200


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 마스킹 및 긴 값 절단 — Recursively mask sensitive fields, truncate long strings."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    if isinstance(data, str) and len(data) > _MAX_VALUE_LEN:
        return data[:_MAX_VALUE_LEN] + "...(truncated)"
    return data


def _error_detail(body: bytes) -> str | None:
    """에러 응답 본문에서 사유 추출 — `detail` of a JSON error body, else the raw text."""
    if not body:
        return None
    try:
        data: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:500]

    detail: Any = data.get("detail", data) if isinstance(data, dict) else data
    text: str = detail if isinstance(detail, str) else json.dumps(detail, default=str)
    return text if len(text) <= 500 else text[:500] + "..."


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom and traces
    them on the application logger at DEBUG.
    Axiom ingest is skipped when AXIOM_API_TOKEN / AXIOM_DATASET are unset.
    """

    def __init__(self, app: ASGIApp, settings: Settings, logger: logging.Logger) -> None:
        super().__init__(app)
        self._logger: logging.Logger = logger
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 스킵 — Skip excluded paths
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()

        # 요청 데이터 수집 — Collect request data
        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        # Request body 읽기 — Read request body (only for methods with body)
        request_body: Any = None
        if self._client and method in ("POST", "PUT", "PATCH"):
            body_bytes = await request.body()
            if body_bytes:
                try:
                    request_body = _mask_dict(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    request_body = "(non-json body)"

        status_code: int = 500
        error_detail: str | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if self._client and status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                error_detail = _error_detail(resp_body)

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            duration_ms = round((time.time() - start_time) * 1000, 2)
            self._logger.debug("%s %s -> %s (%.2f ms)", method, path, status_code, duration_ms)

            if self._client:
                # Axiom 로그 이벤트 구성 — Build Axiom log event
                log_event: dict[str, Any] = {
                    "method": method,
                    "path": path,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                }
                if query_params:
                    log_event["query_params"] = _mask_dict(query_params)
                if request_body is not None:
                    log_event["request_body"] = request_body
                if error_detail:
                    log_event["error"] = error_detail

                try:
                    self._client.ingest_events(self._dataset, [log_event])
                except Exception:
                    # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure
                    self._logger.warning("Axiom ingest failed for %s %s", method, path, exc_info=True)

        return response
