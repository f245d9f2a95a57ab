"""Application constants and configuration values."""

from decimal import Decimal

from core.config import FRONTEND_URL

# CORS origins for development and production
# Production URLs should be added via FRONTEND_URL environment variable
_CORS_ORIGINS_RAW = [
    "http://localhost:5173",      # React dev server (Vite)
    "http://localhost:3000",
    FRONTEND_URL,
]

# Filter out None values and empty strings to avoid CORS errors
CORS_ORIGINS = [origin for origin in _CORS_ORIGINS_RAW if origin and origin.strip()]

# Rankings (dashboard and analysis both show the top 5)
RANKING_TOP_N = 5

# Dashboard "latest entries" panel
RECENT_RECORDS_LIMIT = 8

# Label used when a record points to a collaborator/procedure that no longer exists
UNKNOWN_LABEL = "Unknown"

# Money is kept as Decimal internally and quantized to cents
MONEY_QUANTUM = Decimal("0.01")

# Theme preference values
THEMES = ("light", "dark")

# Longest date range the analysis accepts (inclusive days)
MAX_ANALYSIS_RANGE_DAYS = 366
