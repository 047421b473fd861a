"""Strongly typed identifiers for storefront identity entities.

The credential store assigns user ids, so they are opaque strings rather
than UUIDs.
"""

from typing import NewType

UserId = NewType("UserId", str)
StoreId = NewType("StoreId", str)
