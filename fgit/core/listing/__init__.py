"""Listing of the current change set with assigned IDs."""

from fgit.core.listing.list_usecase import (
    ListingEntry,
    Snapshot,
    build_listing,
    take_snapshot,
)

__all__ = ["ListingEntry", "Snapshot", "build_listing", "take_snapshot"]
