# /app/main.py

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

# --- Application-specific Router Imports ---
from .routers import (
    students_router,
    records_router,
    generations_router,
    taxonomy_router,
    dashboard_router,
)

# --- Storage Imports for Startup Logic and Error Mapping ---
from .db.database import init_db
from .services import database_service
from .services.database_helpers.key_value_storage import StorageUnavailableError, StorageQuotaExceededError


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    # The in-memory backend needs no tables, so no database file is created.
    if not database_service.USE_MEMORY_STORAGE:
        init_db()
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Record Assistant API",
    description="Student rosters, observation records and templated summaries for teachers.",
    version="1.0.0",
    lifespan=lifespan
)


# --- Storage Failures ---
# A failed write is fatal for the request; nothing is retried or queued.
async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
    print(f"ERROR: Storage failure on {request.method} {request.url.path}: {exc}")
    code = status.HTTP_507_INSUFFICIENT_STORAGE if isinstance(exc, StorageQuotaExceededError) else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content={"detail": str(exc)})

app.add_exception_handler(StorageUnavailableError, storage_unavailable_handler)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(records_router.router, prefix="/api/records", tags=["Observation Records"])
app.include_router(generations_router.router, prefix="/api/generations", tags=["Generations"])
app.include_router(taxonomy_router.router, prefix="/api/taxonomy", tags=["Taxonomy"])

# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Record Assistant is running!", "version": app.version}
