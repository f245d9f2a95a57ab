"""
Application configuration using python-dotenv.

This module loads environment variables from .env file into os.environ
for use throughout the application.
"""

import os
import pathlib
from dotenv import load_dotenv


# Determine if we're running in a test environment
# Don't load .env file during testing to ensure predictable test behavior
is_testing = os.getenv("PYTEST_VERSION") is not None or any("pytest" in str(frame) for frame in __import__('inspect').stack(0))

# Load .env file into os.environ (only outside of testing)
if not is_testing:
    # Try multiple possible locations for .env file
    possible_paths = [
        pathlib.Path(__file__).parent.parent.parent / ".env",  # backend/.env (when run from backend/src)
        pathlib.Path(__file__).parent.parent.parent.parent / ".env",  # .env at repository root
        pathlib.Path.cwd() / ".env",  # .env in current directory
    ]

    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(env_path)
            break


# Configuration constants with defaults
# Each can be overridden through the environment or a .env file
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# External salon REST API (collaborators, procedures, prices, records)
SALON_API_URL = os.getenv("SALON_API_URL", "http://localhost:3001/api")
SALON_API_TIMEOUT_SECONDS = float(os.getenv("SALON_API_TIMEOUT_SECONDS", "10"))

# Authentication
ACCESS_CODE = os.getenv("ACCESS_CODE", "021202")
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
JWT_ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "720"))
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Display preferences
DEFAULT_THEME = os.getenv("DEFAULT_THEME", "light")
