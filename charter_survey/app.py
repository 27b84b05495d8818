import logging
import os
from typing import Optional

from dotenv import load_dotenv

from charter_survey.record_store import JsonFileBackend, RecordStore

# Load environment variables from .env file
load_dotenv()

# Set up logging
logging_level = os.environ.get("CHARTER_LOG_LEVEL", "INFO")
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging_level
)
logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = "charter_records.json"


def get_store_path() -> str:
    return os.getenv("CHARTER_STORE_PATH", DEFAULT_STORE_PATH)


def build_store(path: Optional[str] = None) -> RecordStore:
    """Open the JSON-backed record store at *path* (or ``CHARTER_STORE_PATH``)."""
    store_path = path or get_store_path()
    logger.debug("Opening record store at %s", store_path)
    return RecordStore(JsonFileBackend(store_path))
