"""Application configuration loaded from environment variables.

The gateway owns no AI compute. Everything model-driven is delegated over
HTTP:
  - AI_GATEWAY_URL → hosted functions (generate-roadmap, ai-career-coach)
  - STORE_PATH     → JSON file holding the skill catalog and user skills
"""

from __future__ import annotations

import os
from pathlib import Path


class Settings:
    # External AI gateway
    AI_GATEWAY_URL: str = os.getenv("AI_GATEWAY_URL", "http://localhost:9092")
    GATEWAY_TIMEOUT: float = float(os.getenv("GATEWAY_TIMEOUT", "120"))

    # Persistent store
    STORE_PATH: Path = Path(os.getenv("STORE_PATH", "/app/data/skill_store.json"))

    # Request limits
    MAX_UPLOAD_SIZE_MB: int = int(os.getenv("MAX_UPLOAD_SIZE_MB", "10"))
    MAX_MESSAGE_LENGTH: int = 2000


settings = Settings()
