"""FastAPI application entrypoint: career skills gateway.

Responsibilities:
  - Route and validate HTTP requests
  - Serve the skill catalog and user skill profiles from the JSON store
  - Compute role fit, gaps and rankings deterministically
  - Proxy roadmap generation, GitHub analysis and coaching chat to the AI gateway
  - Compare CV and GitHub skills and import them into user profiles

NOT responsible for:
  - Prompting or hosting models (delegated to the AI gateway)
  - Authentication (user ids arrive as explicit path parameters)
  - OCR of scanned CVs
"""

from __future__ import annotations

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.logging_config import setup_logging
from app.routers import catalog, chat, fit, profile_sources, upload, user_skills
from app.services.skill_store import get_store

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store()
    logger.info(
        "Skill store ready: %d skills, %d roles",
        store.count_skills(), store.count_roles(),
    )
    yield


app = FastAPI(
    title="Career Skills Gateway",
    version="1.0.0",
    description="Skill profiles, role-fit scoring and AI gateway proxy",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog.router, tags=["catalog"])
app.include_router(user_skills.router, tags=["skills"])
app.include_router(fit.router, tags=["fit"])
app.include_router(upload.router, prefix="/upload", tags=["upload"])
app.include_router(profile_sources.router, tags=["profile"])
app.include_router(chat.router, tags=["chat"])


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
