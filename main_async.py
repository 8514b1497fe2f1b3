from contextlib import asynccontextmanager, suppress
from typing import Optional
import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from core.config import Settings, settings as default_settings
from core.errors import RecipeServiceError
from core.logging_config import setup_logging
from database.mongo import MongoDatabase
from routes import recipe_route

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Validation failed: " + ", ".join(parts)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    # ==== Store lifecycle: one Motor client per process ====
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        mongo = MongoDatabase(
            settings.mongodb_uri,
            settings.database_name,
            tls=settings.mongodb_tls,
            timeout_ms=settings.mongodb_timeout_ms,
        )
        app.state.mongo = mongo
        # Connectivity check runs in the background, requests are served meanwhile
        connect_task = asyncio.create_task(mongo.connect())
        try:
            yield
        finally:
            connect_task.cancel()
            with suppress(asyncio.CancelledError):
                await connect_task
            mongo.close()

    app = FastAPI(title="Recipe Service", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(recipe_route.router)

    # ==== Logging middleware ====
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"Request: {request.method} {request.url}")
        response = await call_next(request)
        logger.info(f"Response: {response.status_code}")
        return response

    # ==== Error rendering: always {"message": ...} ====
    @app.exception_handler(RecipeServiceError)
    async def recipe_error_handler(request: Request, exc: RecipeServiceError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": _validation_message(exc)})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error")  # full stacktrace
        content = {"message": "Internal server error"}
        if settings.debug:
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    @app.api_route("/health", methods=["GET", "HEAD"])
    async def health(request: Request):
        """Health check with MongoDB connectivity test"""
        try:
            await request.app.state.mongo.ping()
            return {"ok": True, "db": "connected"}
        except PyMongoError as e:
            return {"ok": False, "db": "disconnected", "error": str(e)}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running on port {default_settings.port}")
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
