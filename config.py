"""
Configuration and shared setup for the Fieldnote notebook.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from models import TemplateCategory, default_template

# Load environment variables
load_dotenv()

DATA_DIR = Path(os.environ.get("FIELDNOTE_DATA_DIR", "data"))
TEMPLATE_FILE = Path(os.environ.get("FIELDNOTE_TEMPLATE_FILE", "template.yaml"))
LOG_LEVEL = os.environ.get("FIELDNOTE_LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("FIELDNOTE_LOG_FILE") or None
WEB_PORT = int(os.environ.get("FIELDNOTE_PORT", "5001"))

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(level: str = None, log_file: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Level name, defaults to FIELDNOTE_LOG_LEVEL.
        log_file: Optional file to log to in addition to the console.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel((level or LOG_LEVEL).upper())

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)

    log_file = log_file or LOG_FILE
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)


def load_template_file(path: Path = None) -> Optional[list[TemplateCategory]]:
    """
    Load template categories from YAML.

    Accepts either a bare list or a mapping with a ``categories`` key.
    Keys may be camelCase (enableStress) or snake_case (enable_stress).
    Returns None if the file is missing or unreadable.
    """
    path = path or TEMPLATE_FILE
    if not path.exists():
        return None

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning("Ignoring unreadable template file %s: %s", path, e)
        return None

    if isinstance(data, dict):
        data = data.get("categories")
    if not isinstance(data, list):
        logger.warning("Template file %s has no category list", path)
        return None

    return [TemplateCategory.model_validate(item) for item in data]


def load_default_template() -> list[TemplateCategory]:
    """Template used before the researcher edits one: YAML override or built-in."""
    return load_template_file() or default_template()
