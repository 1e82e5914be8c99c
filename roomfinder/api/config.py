from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class ApiConfig:
    base_url: str = os.getenv("HOTEL_API_BASE_URL", "http://localhost:8080")
    provinces_base_url: str = os.getenv(
        "PROVINCES_API_BASE", "https://provinces.open-api.vn/api"
    )
    timeout: float = float(os.getenv("HOTEL_API_TIMEOUT", "10"))


DEFAULT_API_CONFIG = ApiConfig()
