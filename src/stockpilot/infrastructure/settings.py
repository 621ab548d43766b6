"""Runtime configuration, read from the environment (and an optional .env)."""

import os
from pathlib import Path

from dotenv import load_dotenv

# --- Base Directory ---
# When installed in editable mode the project root is the repo root.
BASE_DIR = Path(__file__).resolve().parents[3]

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Paths ---
DATA_DIR = BASE_DIR / os.getenv("STOCKPILOT_DATA_DIR", "data")
OUTPUT_DIR = BASE_DIR / os.getenv("STOCKPILOT_OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / "logs"
STORE_FILE = DATA_DIR / "store.json"
SESSION_FILE = DATA_DIR / "session.json"

# --- Tenancy & Access ---
COMPANY_ID = os.getenv("STOCKPILOT_COMPANY_ID", "shared_company_id")
ALLOWED_DOMAINS = [
    domain.strip()
    for domain in os.getenv("STOCKPILOT_ALLOWED_DOMAINS", "luckyfood.com").split(",")
    if domain.strip()
]

# --- Reports ---
EXPIRY_WARNING_DAYS = int(os.getenv("STOCKPILOT_EXPIRY_WARNING_DAYS", "30"))
REPORT_FILENAME_BASE = os.getenv("STOCKPILOT_REPORT_FILENAME", "inventory_report")

# --- Recommendations ---
RECOMMENDATIONS_URL = os.getenv("STOCKPILOT_RECOMMENDATIONS_URL")
RECOMMENDATIONS_TIMEOUT = float(os.getenv("STOCKPILOT_RECOMMENDATIONS_TIMEOUT", "30"))

# --- Logging ---
LOG_LEVEL = os.getenv("STOCKPILOT_LOG_LEVEL", "INFO").upper()
