"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    SEED_SAMPLE_DATA   - Load the documented learner cases on startup (default: true)
    SAMPLE_DATA_PATH   - YAML file with the seed issues (default: bundled file)
    EXPORT_PATH        - JSON file rewritten after every submission (default: disabled)
    LOG_DIR            - Directory for the daily log file (default: logs)
    LOG_LEVEL          - Root log level name (default: INFO)
    CORS_ORIGINS       - Comma separated origins allowed to call the API

Seeding:
    The store lives in memory only. Without seeding the API starts empty and
    only wizard submissions populate it.
"""
import os
from dotenv import load_dotenv

load_dotenv()

_DEFAULT_SAMPLE_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data", "sample_issues.yaml"
)

SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "true").lower() == "true"
SAMPLE_DATA_PATH = os.getenv("SAMPLE_DATA_PATH", _DEFAULT_SAMPLE_PATH)
EXPORT_PATH = os.getenv("EXPORT_PATH", "")

LOG_DIR = os.getenv("LOG_DIR", "logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000,http://localhost:8000"
    ).split(",")
    if origin.strip()
]
