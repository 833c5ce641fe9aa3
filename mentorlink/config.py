import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./mentorlink.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# Frontend base URL (used for CORS defaults)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Redis-backed read-through cache and rate limiting
CACHE_ENABLED = os.getenv("CACHE_ENABLED", "true").lower() == "true"
CACHE_TTL_SECONDS = int(os.getenv("CACHE_TTL_SECONDS", "300"))
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"

# Scheduling
SESSION_DURATIONS = (30, 60, 90)
DEFAULT_SESSION_DURATION = 60

# Optional booking and availability checks, all off by default
# ENFORCE_SLOT_FIT: booking must fit inside one of the mentor's windows on that weekday
ENFORCE_SLOT_FIT = os.getenv("ENFORCE_SLOT_FIT", "false").lower() == "true"
# PREVENT_DOUBLE_BOOKING: reject a booking overlapping another scheduled session of the mentor
PREVENT_DOUBLE_BOOKING = os.getenv("PREVENT_DOUBLE_BOOKING", "false").lower() == "true"
# PREVENT_AVAILABILITY_OVERLAP: reject a window overlapping another window on the same day
PREVENT_AVAILABILITY_OVERLAP = os.getenv("PREVENT_AVAILABILITY_OVERLAP", "false").lower() == "true"

# Analytics
# Utilization assumes every weekly window can be used once per week over a month
UTILIZATION_WEEKS_PER_PERIOD = int(os.getenv("UTILIZATION_WEEKS_PER_PERIOD", "4"))
LEADERBOARD_SIZE = int(os.getenv("LEADERBOARD_SIZE", "5"))

# Notifications
NOTIFICATION_LIST_LIMIT = int(os.getenv("NOTIFICATION_LIST_LIMIT", "20"))
OUTBOX_MAX_ATTEMPTS = int(os.getenv("OUTBOX_MAX_ATTEMPTS", "5"))
OUTBOX_BATCH_SIZE = int(os.getenv("OUTBOX_BATCH_SIZE", "100"))

# CORS
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS", f"{FRONTEND_URL},http://localhost:3000"
    ).split(",")
    if origin.strip()
]

# Background worker (arq)
ARQ_MAX_JOBS = int(os.getenv("ARQ_MAX_JOBS", "10"))
ARQ_JOB_TIMEOUT = int(os.getenv("ARQ_JOB_TIMEOUT", "120"))
ARQ_KEEP_RESULT = int(os.getenv("ARQ_KEEP_RESULT", "3600"))
