"""Immutable in-memory listing collection."""

from typing import Iterable, Iterator, Optional

from estatenexus.models.listing import Listing


class ListingCatalog:
    """
    Owned snapshot of loaded listings.

    Updates return a new catalog and never touch the existing one; callers
    swap in the result only after the repository has confirmed the change.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Listing] = ()):
        self._items: tuple[Listing, ...] = tuple(items)

    def __iter__(self) -> Iterator[Listing]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ListingCatalog):
            return NotImplemented
        return self._items == other._items

    @property
    def items(self) -> tuple[Listing, ...]:
        return self._items

    def get(self, listing_id: str) -> Optional[Listing]:
        for listing in self._items:
            if listing.id == listing_id:
                return listing
        return None

    def with_listing(self, listing: Listing) -> "ListingCatalog":
        """Replace the listing with the same id in place, or prepend it as the newest."""
        if self.get(listing.id) is None:
            return ListingCatalog((listing,) + self._items)
        return ListingCatalog(listing if item.id == listing.id else item for item in self._items)

    def without(self, listing_id: str) -> "ListingCatalog":
        return ListingCatalog(item for item in self._items if item.id != listing_id)
