"""
JSON persistence for catalogs.

Only raw fields are written. Derived state (attached messages, speakers,
views, stand-alone series) is rebuilt by prepare() after loading. Optional
fields are omitted when empty.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from online.catalog.catalog import Catalog, CatalogError
from online.catalog.dateonly import DateOnly
from online.catalog.message import Message
from online.catalog.message_type import MessageType
from online.catalog.ministry import Ministry
from online.catalog.reference import SeriesReference
from online.catalog.resource import OnlineResource
from online.catalog.series import Series
from online.catalog.view import View
from online.core.backup import safe_write_json

logger = logging.getLogger(__name__)


# Resources


def resource_to_dict(resource: OnlineResource) -> dict[str, Any]:
    data: dict[str, Any] = {"url": resource.url}
    if resource.name:
        data["name"] = resource.name
    if resource.metadata:
        data["metadata"] = dict(resource.metadata)
    return data


def resource_from_dict(data: dict[str, Any] | str) -> OnlineResource:
    """Decode a resource. A bare string is parsed like a spreadsheet cell."""
    if isinstance(data, str):
        return OnlineResource.parse(data)
    return OnlineResource(
        url=data.get("url", ""),
        name=data.get("name", ""),
        metadata={str(k): str(v) for k, v in (data.get("metadata") or {}).items()},
    )


def _resources_from(items: list | None) -> list[OnlineResource]:
    return [resource_from_dict(item) for item in items or []]


def _media_from(value: Any) -> str:
    # older dumps stored audio/video as a resource object
    if isinstance(value, dict):
        return value.get("url", "")
    return value or ""


# Messages


def message_to_dict(msg: Message) -> dict[str, Any]:
    data: dict[str, Any] = {
        "date": msg.date.to_json(),
        "name": msg.name,
    }
    if msg.description:
        data["description"] = msg.description
    if msg.speakers:
        data["speakers"] = list(msg.speakers)
    if msg.ministry is not None:
        data["ministry"] = msg.ministry.value
    if msg.type is not None:
        data["type"] = msg.type.value
    if msg.visibility is not None:
        data["visibility"] = msg.visibility.value
    if msg.series:
        data["series"] = [{"name": ref.name, "index": ref.index} for ref in msg.series]
    if msg.playlist:
        data["playlist"] = list(msg.playlist)
    if msg.audio:
        data["audio"] = msg.audio
    if msg.video:
        data["video"] = msg.video
    if msg.resources:
        data["resources"] = [resource_to_dict(r) for r in msg.resources]
    return data


def message_from_dict(data: dict[str, Any]) -> Message:
    ministry = data.get("ministry")
    msg_type = data.get("type")
    visibility = data.get("visibility")

    return Message(
        date=DateOnly.from_json(data.get("date")),
        name=data.get("name", ""),
        description=data.get("description", ""),
        speakers=list(data.get("speakers") or []),
        ministry=Ministry.parse(ministry) if ministry else None,
        type=MessageType.parse(msg_type) if msg_type else None,
        visibility=View.parse(visibility) if visibility else None,
        series=[
            SeriesReference(ref["name"], int(ref.get("index") or 0))
            for ref in data.get("series") or []
        ],
        playlist=list(data.get("playlist") or []),
        audio=_media_from(data.get("audio")),
        video=_media_from(data.get("video")),
        resources=_resources_from(data.get("resources")),
    )


# Series


def series_to_dict(seri: Series) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if seri.id:
        data["id"] = seri.id
    data["name"] = seri.name
    if not seri.start_date.is_zero():
        data["start-date"] = seri.start_date.to_json()
    if not seri.end_date.is_zero():
        data["end-date"] = seri.end_date.to_json()
    if seri.description:
        data["description"] = seri.description
    if seri.booklets:
        data["booklets"] = [resource_to_dict(r) for r in seri.booklets]
    if seri.resources:
        data["resource"] = [resource_to_dict(r) for r in seri.resources]
    if seri.visibility is not None:
        data["visibility"] = seri.visibility.value
    if seri.jacket:
        data["jacket"] = seri.jacket
    if seri.thumbnail:
        data["thumbnail"] = seri.thumbnail
    return data


def series_from_dict(data: dict[str, Any]) -> Series:
    visibility = data.get("visibility")

    return Series(
        id=data.get("id", ""),
        name=data.get("name", ""),
        description=data.get("description", ""),
        booklets=_resources_from(data.get("booklets")),
        resources=_resources_from(data.get("resource")),
        visibility=View.parse(visibility) if visibility else None,
        jacket=data.get("jacket", ""),
        thumbnail=data.get("thumbnail", ""),
        start_date=DateOnly.from_json(data.get("start-date")),
        end_date=DateOnly.from_json(data.get("end-date")),
    )


# Catalog


def _parse_created(value: str | None) -> datetime | None:
    if not value:
        return None
    # fromisoformat() only accepts a trailing Z from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    created = datetime.fromisoformat(value)
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created


def catalog_to_dict(catalog: Catalog) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if catalog.created is not None:
        data["created"] = catalog.created.isoformat()
    data["series"] = [series_to_dict(s) for s in catalog.series]
    data["messages"] = [message_to_dict(m) for m in catalog.messages]
    return data


def catalog_from_dict(data: dict[str, Any]) -> Catalog:
    """Build a prepared catalog from decoded JSON.

    Raises:
        CatalogError: If the data is not a well-formed catalog
    """
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog must be a JSON object, got {type(data).__name__}")

    try:
        catalog = Catalog(
            created=_parse_created(data.get("created")),
            series=[series_from_dict(s) for s in data.get("series") or []],
            messages=[message_from_dict(m) for m in data.get("messages") or []],
        )
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise CatalogError(f"Malformed catalog: {e}") from e

    catalog.initialize_messages()
    catalog.prepare()
    logger.debug(
        "Decoded catalog with %d series and %d messages",
        len(catalog.series),
        len(catalog.messages),
    )
    return catalog


def loads_catalog(text: str) -> Catalog:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid catalog JSON: {e}") from e
    return catalog_from_dict(data)


def dumps_catalog(catalog: Catalog, indent: int = 2) -> str:
    return json.dumps(catalog_to_dict(catalog), indent=indent, ensure_ascii=False)


def load_catalog(path: Path | str) -> Catalog:
    """Read a catalog from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Prepared catalog

    Raises:
        CatalogError: If the file cannot be read or is not a valid catalog
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Cannot read catalog file '{path}': {e}") from e

    logger.debug("Loading catalog from %s", path)
    return loads_catalog(text)


def save_catalog(
    path: Path | str,
    catalog: Catalog,
    backup: bool = True,
    backup_dir: Path | None = None,
) -> Path | None:
    """Write a catalog to a JSON file atomically.

    Args:
        path: Destination file
        catalog: Catalog to write
        backup: Back up the existing file first
        backup_dir: Where backups go (defaults to a backups/ dir beside the file)

    Returns:
        Path of the backup that was made, if any
    """
    return safe_write_json(
        Path(path),
        catalog_to_dict(catalog),
        create_backup_first=backup,
        backup_dir=backup_dir,
    )
