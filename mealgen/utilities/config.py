"""Configuration management for the MealGen planner."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# OpenAI Configuration
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL: Final[str] = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
OPENAI_TEMPERATURE: Final[float] = float(os.getenv('OPENAI_TEMPERATURE', '0.7'))
MAX_TOOL_ROUNDS: Final[int] = int(os.getenv('MAX_TOOL_ROUNDS', '4'))
ALLOW_TEXT_FALLBACK: Final[bool] = os.getenv('ALLOW_TEXT_FALLBACK', 'true').lower() == 'true'

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'data')))
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'

# Profile store ("json" or "memory")
PROFILE_STORE: Final[str] = os.getenv('PROFILE_STORE', 'json').lower()
PROFILE_FILE: Final[Path] = Path(os.getenv('PROFILE_FILE', str(DATA_DIR / 'profiles.json')))
DEFAULT_USER_ID: Final[str] = os.getenv('DEFAULT_USER_ID', 'default-user')
