"""Application configuration management."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from backend directory
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

PROJECT_ROOT = Path(__file__).parent.parent.parent

RESULTS_JSON = os.getenv("RESULTS_JSON", str(PROJECT_ROOT / "data" / "pei-election-results.json"))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
