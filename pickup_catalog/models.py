"""
Catalog payload shapes.

These are typing-only views of the upstream JSON; the client passes the
decoded payload through without validating it.
"""

from typing import List, TypedDict


class Location(TypedDict, total=False):
    """A single pickup point. Only ``id`` is interpreted by the client."""

    id: int
    workTime: str
    photos: List[str]
    address: str
    typePoint: int
    coordinates: List[float]
    dtype: int
    isWb: bool
    pickupType: int
    dest: int
    dest3: int
    sign: str


class CatalogEntry(TypedDict):
    """All pickup points of one country."""

    country: str
    markets: List[Location]
