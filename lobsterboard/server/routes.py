"""HTTP request handling for the dashboard API.

`ApiRouter` turns (method, path) into an `ApiResponse` without touching a
socket; `DashboardRequestHandler` only writes what the router returns.
"""

from __future__ import annotations

import json
import logging
import mimetypes
import time
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING
from urllib.parse import urlparse, unquote

from .. import __version__
from ..data.models import RequestContext
from ..log import log_event

if TYPE_CHECKING:
    from .cache import DashboardState

logger = logging.getLogger(__name__)

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class ApiError(Exception):
    """Expected handler failure with a client-safe message."""

    def __init__(
        self,
        message: str,
        status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
        log_message: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.log_message = log_message or message
        super().__init__(message)


@dataclass
class ApiResponse:
    """A fully rendered HTTP response."""

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))


class ApiRouter:
    """Routes requests to API handlers or the static web root.

    Serves:
    - CORS preflight for any path
    - JSON API endpoints backed by DashboardState
    - Static files from the web directory
    """

    API_ROUTES = {
        "/api/status": "_handle_status",
        "/api/cron": "_handle_cron",
        "/api/activity": "_handle_activity",
        "/api/logs": "_handle_logs",
        "/api/sessions": "_handle_sessions",
    }

    def __init__(self, state: "DashboardState", web_dir: Path):
        self.state = state
        self.web_dir = Path(web_dir)

    def dispatch(self, method: str, path: str, context: Optional[RequestContext] = None) -> ApiResponse:
        context = context or RequestContext()
        method = method.upper()

        if method == "OPTIONS":
            return ApiResponse(
                HTTPStatus.NO_CONTENT,
                {**PREFLIGHT_HEADERS, "X-Request-Id": context.request_id},
            )

        route = urlparse(path).path or "/"
        handler_name = self.API_ROUTES.get(route)
        if handler_name:
            return self._run_api(method, route, getattr(self, handler_name), context)

        return self._serve_static(unquote(route), context)

    # --- API Handlers ---

    def _run_api(
        self,
        method: str,
        route: str,
        handler: Callable[[Dict[str, Any]], Any],
        context: RequestContext,
    ) -> ApiResponse:
        started = time.monotonic()
        log_fields: Dict[str, Any] = {}
        try:
            data = handler(log_fields)
        except ApiError as exc:
            log_event(logger, logging.ERROR, exc.log_message, requestId=context.request_id)
            return self._send_error(exc.message, exc.status_code, context)
        except Exception as exc:
            label = route.rsplit("/", 1)[-1].capitalize()
            log_event(
                logger,
                logging.ERROR,
                f"{label} handler error",
                requestId=context.request_id,
                error=str(exc),
                stack=traceback.format_exc(),
            )
            return self._send_error("Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR, context)

        elapsed_ms = int((time.monotonic() - started) * 1000)
        log_event(
            logger,
            logging.INFO,
            f"{method} {route}",
            requestId=context.request_id,
            responseTime=elapsed_ms,
            **log_fields,
        )
        return self._send_success(data, context)

    def _handle_status(self, log_fields: Dict[str, Any]) -> Dict[str, Any]:
        record = self.state.get_status()
        if record is None:
            raise ApiError("Failed to get OpenClaw status", log_message="Failed to get status")
        return record.to_dict()

    def _handle_cron(self, log_fields: Dict[str, Any]) -> Dict[str, Any]:
        return self.state.get_cron_jobs().to_dict()

    def _handle_activity(self, log_fields: Dict[str, Any]) -> Dict[str, Any]:
        # Placeholder until session history is exposed by the CLI
        now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return {"items": [{"text": "Activity feed coming soon", "time": now}]}

    def _handle_logs(self, log_fields: Dict[str, Any]) -> Dict[str, Any]:
        lines = self.state.get_log_lines()
        log_fields["lineCount"] = len(lines)
        return {"lines": lines}

    def _handle_sessions(self, log_fields: Dict[str, Any]) -> Dict[str, Any]:
        record = self.state.get_status()
        return {"count": record.sessions if record else 0}

    # --- Static Files ---

    def _filesystem_path(self, path: str) -> Optional[Path]:
        root = self.web_dir.resolve()
        candidate = (root / path.lstrip("/")).resolve()
        try:
            candidate.relative_to(root)
        except ValueError:
            return None
        return candidate

    def _serve_static(self, path: str, context: RequestContext) -> ApiResponse:
        if path == "/":
            path = "/index.html"
        if "\x00" in path:
            # No file name can contain NUL
            return self._send_text("Not Found", HTTPStatus.NOT_FOUND, context)
        target = self._filesystem_path(path)
        if target is None:
            log_event(
                logger,
                logging.WARNING,
                "Path traversal attempt blocked",
                requestId=context.request_id,
                path=path,
            )
            return self._send_error("Forbidden", HTTPStatus.FORBIDDEN, context)

        if target.is_dir():
            target = target / "index.html"
        try:
            body = target.read_bytes()
        except (FileNotFoundError, NotADirectoryError):
            return self._send_text("Not Found", HTTPStatus.NOT_FOUND, context)
        except OSError as exc:
            log_event(
                logger,
                logging.ERROR,
                "Static file error",
                requestId=context.request_id,
                path=path,
                error=str(exc),
            )
            return self._send_text("Server Error", HTTPStatus.INTERNAL_SERVER_ERROR, context)

        content_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
        return ApiResponse(
            HTTPStatus.OK,
            {"Content-Type": content_type, "X-Request-Id": context.request_id},
            body,
        )

    # --- Helper Methods ---

    def _send_json(self, payload: Any, status_code: HTTPStatus, context: RequestContext) -> ApiResponse:
        headers = {
            "Content-Type": "application/json",
            "Cache-Control": "no-store, max-age=0",
            **CORS_HEADERS,
            "X-Request-Id": context.request_id,
        }
        return ApiResponse(status_code, headers, json.dumps(payload).encode("utf-8"))

    def _send_success(self, data: Any, context: RequestContext) -> ApiResponse:
        return self._send_json({"status": "ok", "data": data}, HTTPStatus.OK, context)

    def _send_error(self, message: str, status_code: HTTPStatus, context: RequestContext) -> ApiResponse:
        return self._send_json({"status": "error", "message": message}, status_code, context)

    def _send_text(self, text: str, status_code: HTTPStatus, context: RequestContext) -> ApiResponse:
        headers = {"Content-Type": "text/plain", "X-Request-Id": context.request_id}
        return ApiResponse(status_code, headers, text.encode("utf-8"))


class DashboardRequestHandler(BaseHTTPRequestHandler):
    """HTTP request handler that writes ApiRouter responses."""

    # Set by the server
    router: Optional[ApiRouter] = None

    server_version = f"LobsterBoard/{__version__}"

    def do_GET(self):
        self._handle("GET")

    def do_HEAD(self):
        self._handle("HEAD", include_body=False)

    def do_OPTIONS(self):
        self._handle("OPTIONS")

    # Every other method shares the GET routing
    def do_POST(self):
        self._handle("POST")

    def do_PUT(self):
        self._handle("PUT")

    def do_PATCH(self):
        self._handle("PATCH")

    def do_DELETE(self):
        self._handle("DELETE")

    def _handle(self, method: str, *, include_body: bool = True) -> None:
        router = self.router
        if not router:
            self.send_error(HTTPStatus.SERVICE_UNAVAILABLE, "Server not initialized.")
            return
        response = router.dispatch(method, self.path)
        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(response.body)))
        self.end_headers()
        if include_body and response.body:
            self.wfile.write(response.body)

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)
