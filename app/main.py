# app/main.py
"""
FastAPI application entry point.
Includes CORS, request timing, domain error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from app.routers import auth, player, purchases, vehicles, garages, tiles, health
from app.database import create_tables
from app.config import settings
from app.services.exceptions import CyberTaxiError, StorageFailure
from app.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="CyberTaxi API",
    description="Fleet, garage and economy backend for the CyberTaxi map game.",
    version="0.5.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (the SPA runs on its own dev-server origin) ─────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGIN_LIST,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Error Handlers ───────────────────────────────────────────────────────────
@app.exception_handler(CyberTaxiError)
async def domain_error_handler(request: Request, exc: CyberTaxiError):
    content = {"detail": exc.detail}
    if isinstance(exc, StorageFailure):
        content["error"] = exc.error
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Bad request bodies are a 400 for this API, not FastAPI's default 422."""
    # Echoed input and ctx can hold NaN/Infinity, which JSONResponse refuses to render
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    missing = [str(e["loc"][-1]) for e in errors if e["type"] == "missing" and e["loc"]]
    detail = f"Missing required fields: {', '.join(missing)}" if missing else "Invalid request data"
    logger.info(f"Rejected {request.method} {request.url.path}: {detail}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail, "errors": jsonable_encoder(errors)},
    )


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Storage failure on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Storage failure", "error": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(auth.router,      prefix="/api", tags=["Auth"])
app.include_router(player.router,    prefix="/api", tags=["Players"])
app.include_router(purchases.router, prefix="/api", tags=["Purchases & Slots"])
app.include_router(vehicles.router,  prefix="/api", tags=["Vehicles"])
app.include_router(garages.router,   prefix="/api", tags=["Garages"])
app.include_router(tiles.router,     prefix="/api", tags=["Map Tiles"])
app.include_router(health.router,    prefix="/api", tags=["Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("CyberTaxi API starting up...")
    create_tables()
    logger.info("Database tables ready")
    logger.info(f"Tile server: {settings.TILE_SERVER_URL}")
    logger.info(f"Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT} (docs at /docs)")


@app.on_event("shutdown")
async def shutdown():
    logger.info("CyberTaxi API shutting down...")
