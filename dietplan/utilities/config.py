"""Configuration management for the Diet Planner application."""
import os
from typing import Final
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = _flag('DEBUG', 'False')
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Local model server (Ollama, OpenAI-compatible endpoint)
AI_ENABLED: Final[bool] = _flag('AI_ENABLED', 'True')
OLLAMA_BASE_URL: Final[str] = os.getenv('OLLAMA_BASE_URL', 'http://localhost:11434/v1')
OLLAMA_MODEL: Final[str] = os.getenv('OLLAMA_MODEL', 'llama3.1')
AI_TIMEOUT_SECONDS: Final[float] = float(os.getenv('AI_TIMEOUT_SECONDS', '20'))

# Meal plan defaults when the caller does not send a calorie target
DEFAULT_CALORIE_TARGET: Final[int] = int(os.getenv('DEFAULT_CALORIE_TARGET', '1600'))
DEFAULT_AI_CALORIE_LIMIT: Final[int] = int(os.getenv('DEFAULT_AI_CALORIE_LIMIT', '1800'))

