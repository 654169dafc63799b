# backend/app/main.py
import os
from datetime import datetime

import requests
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.api.routes import router
from backend.app.core import config
from backend.app.core.exceptions import ProviderResponseError

app = FastAPI(title="City Explorer API")

# Cross-origin support for the browser client
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.include_router(router)

# Static client files; registered after the API routes so those win
if os.path.isdir(config.STATIC_DIR):
    app.mount("/", StaticFiles(directory=config.STATIC_DIR, html=True), name="public")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return PlainTextResponse(config.NOT_FOUND_MESSAGE, status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


@app.exception_handler(requests.exceptions.RequestException)
@app.exception_handler(ProviderResponseError)
@app.exception_handler(SQLAlchemyError)
async def server_error_handler(request: Request, exc: Exception):
    # requests errors embed the provider URL (and its key) in their message
    if isinstance(exc, requests.exceptions.RequestException):
        status = exc.response.status_code if exc.response is not None else "no response"
        detail = f"provider call failed ({status})"
    else:
        detail = str(exc)
    print(f"[{datetime.now()}] {request.url.path} failed: {type(exc).__name__}: {detail}")
    return PlainTextResponse(config.GENERIC_ERROR_MESSAGE, status_code=500)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    print(f"[{datetime.now()}] {request.url.path} failed unexpectedly: {type(exc).__name__}: {exc}")
    return PlainTextResponse(config.GENERIC_ERROR_MESSAGE, status_code=500)


def run():
    print(f"[{datetime.now()}] Listening on PORT:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
