from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Body, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auto_nbsp.formatting.config import InvalidConfiguration
from auto_nbsp.formatting.engine import engine_for
from auto_nbsp.logging_setup import ensure_file_logging
from auto_nbsp.models import ErrorEnvelope, NbspOptions, NbspRequest, NbspResponse, RulesResponse
from auto_nbsp.settings import default_options, log_settings

logger = logging.getLogger(__name__)

MAX_TEXT_CHARS = 2_000_000


def _error_code_for_status(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code in {400, 413, 422}:
        return "bad_request"
    return "internal_error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": ErrorEnvelope(code=_error_code_for_status(status_code), message=message).model_dump()},
    )


def _options_or_default(options: NbspOptions | None) -> NbspOptions:
    return options if options is not None else default_options()


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    log_file = ensure_file_logging(log_settings())
    if log_file is not None:
        logger.info("file logging enabled: %s", log_file)
    yield


app = FastAPI(lifespan=_lifespan)


@app.exception_handler(StarletteHTTPException)
async def _http_exception_handler(_request: Request, exc: StarletteHTTPException):
    return _error(int(exc.status_code), str(exc.detail))


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(_request: Request, exc: RequestValidationError):
    msg = "bad request"
    errors = exc.errors()
    if errors:
        msg = errors[0].get("msg") or msg
    return _error(400, msg)


@app.exception_handler(InvalidConfiguration)
async def _invalid_configuration_handler(_request: Request, exc: InvalidConfiguration):
    return _error(400, str(exc))


@app.exception_handler(Exception)
async def _unhandled_exception_handler(_request: Request, exc: Exception):
    logger.exception("unhandled error")
    return _error(500, str(exc))


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.post("/api/v1/nbsp", response_model=NbspResponse)
async def replace_text(body: NbspRequest = Body(...)):
    if len(body.text) > MAX_TEXT_CHARS:
        raise HTTPException(status_code=413, detail=f"text too large (> {MAX_TEXT_CHARS} chars)")

    config = _options_or_default(body.options).to_config()
    result = engine_for(config).replace_with_stats(body.text)
    return NbspResponse(text=result.text, stats=result.stats)


@app.get("/api/v1/rules", response_model=RulesResponse)
async def get_rules(language: str | None = Query(default=None, min_length=1, max_length=35)):
    opts = default_options()
    engine = engine_for(opts.to_config())
    lang = language or opts.language
    rules = engine.catalog.resolve_all(lang)
    return RulesResponse(language=lang, rules={str(cat): list(tokens) for cat, tokens in rules.items()})
