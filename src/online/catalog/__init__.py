"""Catalog model: series, messages, validation and persistence."""

from online.catalog.catalog import Catalog, CatalogError
from online.catalog.codec import (
    catalog_from_dict,
    catalog_to_dict,
    dumps_catalog,
    load_catalog,
    loads_catalog,
    save_catalog,
)
from online.catalog.dateonly import DateOnly
from online.catalog.message import MEDIA_STATES, CachingSizeResolver, Message
from online.catalog.message_type import MessageType
from online.catalog.ministry import Ministry
from online.catalog.reference import SeriesReference
from online.catalog.resource import OnlineResource
from online.catalog.series import (
    Series,
    SeriesState,
    filter_series_by_ministry,
    filter_series_by_view,
    sort_series_by_name,
    sort_series_newest_first,
    sort_series_oldest_first,
)
from online.catalog.validate import validate
from online.catalog.view import View

__all__ = [
    # Model
    "Catalog",
    "CatalogError",
    "DateOnly",
    "Message",
    "MessageType",
    "Ministry",
    "OnlineResource",
    "Series",
    "SeriesReference",
    "SeriesState",
    "View",
    "MEDIA_STATES",
    "CachingSizeResolver",
    # Series helpers
    "filter_series_by_ministry",
    "filter_series_by_view",
    "sort_series_by_name",
    "sort_series_oldest_first",
    "sort_series_newest_first",
    # Validation
    "validate",
    # Persistence
    "catalog_from_dict",
    "catalog_to_dict",
    "dumps_catalog",
    "loads_catalog",
    "load_catalog",
    "save_catalog",
]
