import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.compliance_engine import ComplianceEngine
from app.core.config import Settings, load_settings
from app.utils.logging import error_fields, get_logger, log_event
from app.utils.validation import ValidationError, validate_request

LOGGER = get_logger("api.server")

CHECK_PATH = "/api/compliance/check"
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def create_app(engine: ComplianceEngine | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or (engine.settings if engine else load_settings())
    engine = engine or ComplianceEngine(settings)

    app = FastAPI(title="Content Compliance Engine", version="0.1.0")
    app.state.settings = settings
    app.state.engine = engine

    @app.post(CHECK_PATH)
    async def check_content(request: Request) -> JSONResponse:
        missing = settings.missing_api_keys() if settings.require_api_keys else []
        if missing:
            log_event(LOGGER, "missing_api_keys", keys=missing)
            return _json(
                500,
                {
                    "success": False,
                    "error": "Server configuration error",
                    "details": f"The following environment variables are not set: {', '.join(missing)}",
                },
            )

        try:
            payload = await request.json()
        except ValueError:
            return _json(400, {"success": False, "error": "Request body must be a JSON object."})

        try:
            compliance_request = validate_request(payload)
        except ValidationError as exc:
            log_event(LOGGER, "request_rejected", error=str(exc))
            return _json(400, {"success": False, "error": str(exc)})

        try:
            report = await engine.check(compliance_request)
        except Exception as exc:
            log_event(LOGGER, "compliance_check_failed", level=logging.ERROR, **error_fields(exc))
            return _json(500, {"success": False, "error": "Compliance check failed", "details": str(exc)})

        return _json(200, report.to_dict())

    @app.api_route(CHECK_PATH, methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"])
    async def method_not_allowed() -> JSONResponse:
        return _json(405, {"success": False, "error": "Method not allowed"})

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        missing = settings.missing_api_keys()
        return {"status": "ok", "apiKeysConfigured": not missing, "missingKeys": missing}

    return app


def _json(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body, headers=CORS_HEADERS)
