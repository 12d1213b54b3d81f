"""Service configuration constants, read once from the environment."""

import os

# Server binding for uvicorn
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# "development" exposes unexpected error messages in API responses
APP_ENV = os.getenv("APP_ENV", "production")

# CORS origins (comma-separated)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")

# Figma Personal Access Token
FIGMA_TOKEN = os.getenv("FIGMA_ACCESS_TOKEN") or os.getenv("FIGMA_TOKEN", "")

# Default completion provider when the request does not pick one
AI_PROVIDER = os.getenv("AI_PROVIDER", "github")

# Project extraction output root and flat-file record store location
OUTPUT_DIR = os.getenv("OUTPUT_DIR", os.path.join(os.getcwd(), "output"))
DATABASE_PATH = os.getenv(
    "DATABASE_PATH", os.path.join(os.getcwd(), "database", "generated-code.json")
)
