"""Catalog I/O: parse, serialize, and the file gateways that persist books.json."""
import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from mathshelf.models.catalog import Catalog

logger = logging.getLogger(__name__)


def parse_catalog(raw: str | bytes | None) -> Optional[Catalog]:
    """
    Parse a catalog document for editing.

    Absent or blank input is an empty catalog. Input that is present but
    cannot be parsed returns None: saving over it would destroy data.
    """
    if raw is None or not raw.strip():
        return Catalog(grades=[])

    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Catalog is not valid JSON: %s", e)
        return None

    if not isinstance(data, dict):
        logger.warning("Catalog root is %s, expected an object", type(data).__name__)
        return None

    try:
        return Catalog.model_validate(data)
    except ValidationError as e:
        logger.warning("Catalog does not match the expected shape: %s", e)
        return None


def load_catalog(raw: str | bytes | None) -> Catalog:
    """
    Parse a catalog document for viewing.

    Missing or broken input is not an error: an empty catalog is returned so
    the caller always has something to render.
    """
    catalog = parse_catalog(raw)
    if catalog is None:
        logger.warning("Starting with an empty catalog")
        return Catalog(grades=[])
    return catalog


def serialize_catalog(catalog: Catalog) -> bytes:
    """Render the catalog as UTF-8 JSON (Korean text kept readable)."""
    return catalog.model_dump_json(indent=2).encode("utf-8")


class CatalogGateway(Protocol):
    """Where the serialized catalog lives."""

    def read(self) -> Optional[bytes]:
        ...

    def write(self, data: bytes) -> bool:
        ...


class JsonFileGateway:
    """Catalog stored in a local JSON file (the desktop app)."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> Optional[bytes]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_bytes()
        except OSError as e:
            logger.error("Error reading catalog %s: %s", self.path, e)
            return None

    def write(self, data: bytes) -> bool:
        """Write atomically (temp file then replace). Returns False on failure."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path = self.path.with_suffix(".tmp")
            temp_path.write_bytes(data)
            temp_path.replace(self.path)
        except OSError as e:
            logger.error("Error writing catalog %s: %s", self.path, e)
            return False
        return True


class ReadOnlyGateway(JsonFileGateway):
    """Hosted copy of the catalog: readable, never written."""

    def write(self, data: bytes) -> bool:
        logger.warning("Save disabled: %s is served read-only", self.path)
        return False


def read_catalog(gateway: CatalogGateway) -> Catalog:
    """Load the catalog from a gateway, empty if there is nothing usable."""
    return load_catalog(gateway.read())


def write_catalog(catalog: Catalog, gateway: CatalogGateway) -> bool:
    """Persist the catalog; the caller decides what to do when this is False."""
    return gateway.write(serialize_catalog(catalog))


def read_catalog_for_update(gateway: CatalogGateway) -> Optional[Catalog]:
    """Load the catalog before a change; None if the stored document is unusable."""
    return parse_catalog(gateway.read())
