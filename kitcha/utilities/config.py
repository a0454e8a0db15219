"""Configuration management for the Kitcha backend."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Users (authentication lives outside this service)
DEFAULT_USER_ID: Final[str] = os.getenv('DEFAULT_USER_ID', 'default')

# Money display
CURRENCY_SYMBOL: Final[str] = os.getenv('CURRENCY_SYMBOL', '₱')

# Market price service used for shopping list cost estimates
PRICE_SERVICE_URL: Final[str] = os.getenv('PRICE_SERVICE_URL', '')
PRICE_SERVICE_TIMEOUT: Final[float] = float(os.getenv('PRICE_SERVICE_TIMEOUT', '5.0'))

# Pantry Alerts Configuration
DAYS_BEFORE_EXPIRY: Final[int] = int(os.getenv('DAYS_BEFORE_EXPIRY', '7'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DEFAULT_DATA_DIR: Final[Path] = BASE_DIR / 'data'


def get_data_dir() -> Path:
    """Data directory, read on every call so it can be redirected at runtime."""
    return Path(os.getenv('KITCHA_DATA_DIR', str(DEFAULT_DATA_DIR))).resolve()
