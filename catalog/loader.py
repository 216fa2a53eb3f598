"""Load raw product records from the first usable data source.

Sources are probed in order:

1. primary JSON artifact (``PRIMARY_DATA_PATH``)
2. fallback JSON artifact (``FALLBACK_DATA_PATH``)
3. remote JSON export (``REMOTE_DATA_URL``), only when configured
4. generated sample data

Each probe returns a ``LoadOutcome`` value instead of raising; the first
``Loaded`` outcome wins. ``load()`` itself never raises.
"""

import json
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import requests

from catalog.config import (
    FALLBACK_DATA_PATH,
    PRIMARY_DATA_PATH,
    REMOTE_DATA_URL,
    REQUEST_TIMEOUT,
)
from catalog.logging_config import get_logger, log_catalog_event
from catalog.models import CatalogMetadata, RawProductRecord
from catalog.sample_data import generate_sample_products

__all__ = [
    "Loaded",
    "SourceMissing",
    "ParseFailed",
    "LoadOutcome",
    "LoadResult",
    "interpret_payload",
    "probe_file",
    "probe_remote",
    "load",
    "sample_result",
    "SAMPLE_SOURCE",
    "LEGACY_SOURCE",
]

logger = get_logger(__name__)

SAMPLE_SOURCE = "sample_data"
LEGACY_SOURCE = "legacy_data"


@dataclass(frozen=True)
class Loaded:
    source: str
    records: List[RawProductRecord]
    metadata: CatalogMetadata


@dataclass(frozen=True)
class SourceMissing:
    """The source does not exist or could not be read."""

    source: str
    reason: str = "not found"


@dataclass(frozen=True)
class ParseFailed:
    """The source was read but is not a usable record set."""

    source: str
    reason: str


LoadOutcome = Union[Loaded, SourceMissing, ParseFailed]


@dataclass(frozen=True)
class LoadResult:
    """Records and metadata handed to the catalog index."""

    records: List[RawProductRecord]
    metadata: CatalogMetadata


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def interpret_payload(payload: Any, source: str, now: Optional[str] = None) -> LoadOutcome:
    """Turn parsed JSON into a LoadOutcome.

    Accepts the enhanced ``{"products": [...], "metadata": {...}}`` envelope
    or a legacy flat array of records. Anything else, or an empty record
    list, is a ParseFailed outcome.

    Args:
        payload: Parsed JSON document
        source: Label of the source the payload came from
        now: Timestamp to use when the payload carries none

    Returns:
        Loaded, or ParseFailed with the reason
    """
    now = now or _now()

    if isinstance(payload, list):
        if not payload:
            return ParseFailed(source, "record list is empty")
        metadata = CatalogMetadata(
            scraped_at=now,
            total_products=len(payload),
            source=LEGACY_SOURCE,
        )
        return Loaded(source, list(payload), metadata)

    if isinstance(payload, dict) and isinstance(payload.get("products"), list):
        records = payload["products"]
        if not records:
            return ParseFailed(source, "record list is empty")
        raw_meta = payload.get("metadata") if isinstance(payload.get("metadata"), dict) else {}
        categories = raw_meta.get("categories")
        metadata = CatalogMetadata(
            scraped_at=str(raw_meta.get("scrapedAt") or now),
            total_products=len(records),
            source=str(raw_meta.get("source") or source),
            categories=tuple(str(c) for c in categories) if isinstance(categories, list) else (),
        )
        return Loaded(source, list(records), metadata)

    return ParseFailed(source, f"unexpected shape: {type(payload).__name__}")


def probe_file(path: Union[str, Path], source: str) -> LoadOutcome:
    """Probe a JSON file on disk."""
    file_path = Path(path)
    if not file_path.is_file():
        return SourceMissing(source, f"{file_path} not found")
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        return SourceMissing(source, str(exc))
    try:
        # Bytes let json detect UTF-8/16/32; bad encodings surface as ValueError.
        payload = json.loads(data)
    except ValueError as exc:
        return ParseFailed(source, str(exc))
    return interpret_payload(payload, source)


def probe_remote(url: str, source: str = "remote_export", timeout: int = REQUEST_TIMEOUT) -> LoadOutcome:
    """Probe a remote JSON export over HTTP."""
    if not url:
        return SourceMissing(source, "no URL configured")
    try:
        response = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
        response.raise_for_status()
    except requests.RequestException as exc:
        return SourceMissing(source, str(exc))
    try:
        payload = response.json()
    except ValueError as exc:
        return ParseFailed(source, str(exc))
    return interpret_payload(payload, source)


def _log_outcome(outcome: LoadOutcome) -> None:
    if isinstance(outcome, Loaded):
        log_catalog_event(
            "source_probe",
            {
                "message": f"Loaded {len(outcome.records)} records from {outcome.source}",
                "source": outcome.source,
                "outcome": "loaded",
                "records": len(outcome.records),
            },
        )
    else:
        log_catalog_event(
            "source_probe",
            {
                "message": f"Source {outcome.source} unusable: {outcome.reason}",
                "source": outcome.source,
                "outcome": type(outcome).__name__,
                "reason": outcome.reason,
            },
        )


def load(
    primary_path: Optional[Union[str, Path]] = None,
    fallback_path: Optional[Union[str, Path]] = None,
    remote_url: Optional[str] = None,
) -> LoadResult:
    """Load raw records from the first usable source.

    Args:
        primary_path: Primary JSON artifact (default: ``PRIMARY_DATA_PATH``)
        fallback_path: Fallback JSON artifact (default: ``FALLBACK_DATA_PATH``)
        remote_url: Remote JSON export (default: ``REMOTE_DATA_URL``; empty disables)

    Returns:
        LoadResult with a non-empty record list. If the primary source could
        not be parsed, its error message is kept in ``metadata.error``.
    """
    primary = primary_path if primary_path is not None else PRIMARY_DATA_PATH
    fallback = fallback_path if fallback_path is not None else FALLBACK_DATA_PATH
    remote = remote_url if remote_url is not None else REMOTE_DATA_URL

    probes: List[Callable[[], LoadOutcome]] = [
        lambda: probe_file(primary, "primary_file"),
        lambda: probe_file(fallback, "fallback_file"),
        lambda: probe_remote(remote),
    ]

    primary_error: Optional[str] = None
    for position, probe in enumerate(probes):
        outcome = probe()
        _log_outcome(outcome)
        if isinstance(outcome, Loaded):
            return LoadResult(outcome.records, replace(outcome.metadata, error=primary_error))
        if position == 0 and isinstance(outcome, ParseFailed):
            primary_error = outcome.reason

    logger.warning("No data source usable, serving sample products")
    return sample_result(error=primary_error)


def sample_result(error: Optional[str] = None) -> LoadResult:
    """Generated sample records, tagged with ``SAMPLE_SOURCE``."""
    records = generate_sample_products()
    metadata = CatalogMetadata(
        scraped_at=_now(),
        total_products=len(records),
        source=SAMPLE_SOURCE,
        error=error,
    )
    return LoadResult(records, metadata)
