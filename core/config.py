import os
from dotenv import load_dotenv

load_dotenv(override=False)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ---------- PocketBase ----------
BASE_URL = os.getenv("STUDY_PB_URL", "http://127.0.0.1:8090")
IDENTITY = os.getenv("STUDY_PB_IDENTITY", "")
PASSWORD = os.getenv("STUDY_PB_PASSWORD", "")

# admin credentials, only used by pb_bootstrap.py
ADMIN_EMAIL = os.getenv("STUDY_PB_ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.getenv("STUDY_PB_ADMIN_PASSWORD", "")

REQUEST_TIMEOUT = _env_float("STUDY_REQUEST_TIMEOUT", 10.0)
PER_PAGE = 200

# ---------- app ----------
LOG_LEVEL = os.getenv("STUDY_LOG_LEVEL", "INFO").upper()

SUBJECT_COLORS = ("#ef4444", "#10b981", "#f59e0b", "#8b5cf6", "#06b6d4", "#f97316")
