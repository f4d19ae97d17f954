from loguru import logger
import os
import sys
from pathlib import Path

LOG_DIR = Path(__file__).resolve().parents[2] / 'logs'
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_PATH = LOG_DIR / 'app.log'
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)
logger.add(LOG_PATH, level=LOG_LEVEL, rotation='1 MB', retention=10)

__all__ = ['logger']
