"""
Main FastAPI application for the job board API.
Serves health, job detail (contact gating), share unlock and metrics.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.routes import health, jobs, shares
from app.core.config import settings
from app.core.logging import configure_logging
from app.utils.metrics import router as metrics_router


configure_logging()

app = FastAPI(
    title="Job Board API",
    description="Job detail with share-to-unlock contact gating",
    version="1.0.0",
)

# CORS
origins = settings.cors_origins_list
if not origins:
    origins = ["http://localhost:3000", "http://127.0.0.1:3000", "https://servicewechat.com"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(health.router, tags=["health"])
app.include_router(jobs.router)
app.include_router(shares.router)
app.include_router(metrics_router)
