"""Loading and validation of the static decoy-spread catalog.

The catalog is authored as JSON (package data by default, or a file named by
``DUCKSMART_SPREAD_CATALOG_PATH``), validated once, and handed to the
recommendation engine as an immutable value.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from pydantic import ConfigDict, ValidationError, model_validator

from ducksmart.config import settings
from ducksmart.domain import SpreadOptions, SpreadProfile, _StrictBaseModel
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="catalog")

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "decoy_spreads.json"


class CatalogError(ValueError):
    """Raised when a spread catalog cannot be read or fails validation."""


class SpreadCatalog(_StrictBaseModel):
    """Ordered, immutable collection of spread profiles plus picker options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    spreads: Tuple[SpreadProfile, ...]
    options: SpreadOptions

    @model_validator(mode="after")
    def _check_integrity(self) -> "SpreadCatalog":
        """Keys must be unique and at most one entry may be an add-on."""
        seen: set[str] = set()
        for spread in self.spreads:
            if spread.key in seen:
                raise ValueError(f"duplicate spread key '{spread.key}'")
            seen.add(spread.key)
        addons = [s.key for s in self.spreads if s.is_addon]
        if len(addons) > 1:
            raise ValueError(f"expected at most one add-on spread, found {addons}")
        return self

    def get(self, key: str) -> SpreadProfile | None:
        """Return the spread with the given key, if any."""
        return next((s for s in self.spreads if s.key == key), None)

    @property
    def addon(self) -> SpreadProfile | None:
        return next((s for s in self.spreads if s.is_addon), None)


def load_catalog(path: str | Path | None = None) -> SpreadCatalog:
    """Read and validate a catalog file; defaults to the bundled catalog."""
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Cannot read spread catalog {catalog_path}: {exc}") from exc

    try:
        catalog = SpreadCatalog.model_validate(raw)
    except ValidationError as exc:
        raise CatalogError(f"Invalid spread catalog {catalog_path}: {exc}") from exc

    logger.info(
        "Loaded spread catalog",
        extra={"path": str(catalog_path), "spreads": len(catalog.spreads)},
    )
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> SpreadCatalog:
    """Catalog used when callers do not inject one; loaded once per process."""
    return load_catalog(settings.spread_catalog_path)
