"""Filesystem locations shared by settings and the CLI."""

from pathlib import Path

# src/paths.py -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Local settings file read by both load_dotenv and pydantic-settings
ENV_FILE = PROJECT_ROOT / ".env"
