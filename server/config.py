# config.py
import os
from dotenv import load_dotenv
load_dotenv()

import logging
from logging_utils import configure_logging

configure_logging()
logger = logging.getLogger("runintel.config")

# Airport assumed when a message names none we can classify
HOME_AIRPORT = os.getenv("HOME_AIRPORT", "JAC").strip().upper()

# Blocks shorter than this are reported as warnings and skipped
MIN_BLOCK_LINES = int(os.getenv("MIN_BLOCK_LINES", "6"))

DEFAULT_RUN_DURATION_MINUTES = int(os.getenv("DEFAULT_RUN_DURATION_MINUTES", "60"))

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8001"))
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]

logger.info(
    f"Config: home_airport={HOME_AIRPORT}, min_block_lines={MIN_BLOCK_LINES}, "
    f"default_duration={DEFAULT_RUN_DURATION_MINUTES}m"
)
