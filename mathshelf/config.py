"""Paths and deployment settings, read from the environment (.env supported)."""
from pathlib import Path
import os

from dotenv import load_dotenv

from mathshelf.tools.catalog_io import CatalogGateway, JsonFileGateway, ReadOnlyGateway

load_dotenv()

# Project root
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"

DEFAULT_SHARE_BASE_URL = "https://kug0115-cpu.github.io/kookmath/"


def data_path() -> Path:
    return Path(os.getenv("MATHSHELF_DATA_PATH", str(DATA_DIR / "books.json")))


def share_base_url() -> str:
    """Page that share links point at (the hosted viewer)."""
    return os.getenv("MATHSHELF_SHARE_BASE_URL", DEFAULT_SHARE_BASE_URL)


def is_read_only() -> bool:
    return os.getenv("MATHSHELF_READ_ONLY", "false").lower() in ("1", "true", "yes")


def default_gateway() -> CatalogGateway:
    """Gateway for the configured deployment."""
    if is_read_only():
        return ReadOnlyGateway(data_path())
    return JsonFileGateway(data_path())
