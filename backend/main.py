from dotenv import load_dotenv
load_dotenv()

import asyncio
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from database import create_client, get_database, get_db

# ENV
from config.env import ENV, CORS_ALLOWED_ORIGINS, LOG_LEVEL, validate_production_env

# ERRORS
from utils.errors import AuthError
from utils.indexes import ensure_indexes
from utils.mongo import store_errors

# ROUTES
from routes.auth import router as auth_router
from routes.seller import router as seller_router
from routes.admin import router as admin_router

# WORKERS
from workers.approval_audit_worker import approval_audit_worker

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

logger.info("ENV=%s", ENV)

app = FastAPI(
    title="EcoLoop Kenya API",
    version="1.0.0",
    docs_url=None if ENV == "production" else "/docs",
    redoc_url=None if ENV == "production" else "/redoc",
    openapi_url=None if ENV == "production" else "/openapi.json",
)

# -----------------------------
# CORS
# -----------------------------

allowed_origins = [origin.strip() for origin in CORS_ALLOWED_ORIGINS if origin.strip()]
if not allowed_origins:
    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# ERRORS
# -----------------------------

@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.message,
            "error": exc.code,
        },
    )

# -----------------------------
# ROUTES
# -----------------------------

app.include_router(auth_router, prefix="/api")
app.include_router(seller_router, prefix="/api")
app.include_router(admin_router, prefix="/api")

# -----------------------------
# HEALTH CHECKS
# -----------------------------

@app.get("/api/health")
async def health():

    return {"status": "ok"}

@app.get("/api/health/db")
async def health_db(request: Request):
    db = get_db(request)
    with store_errors("ping"):
        await db.command("ping")
    return {"status": "mongodb connected"}

# -----------------------------
# STARTUP / SHUTDOWN
# -----------------------------

@app.on_event("startup")
async def startup():
    validate_production_env()

    app.state.client = create_client()
    app.state.db = get_database(app.state.client)

    await ensure_indexes(app.state.db)

    app.state.workers = [
        asyncio.create_task(approval_audit_worker(app.state.db)),
    ]

@app.on_event("shutdown")
async def shutdown():
    tasks = getattr(app.state, "workers", [])
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
    app.state.workers = []

    client = getattr(app.state, "client", None)
    if client is not None:
        client.close()
