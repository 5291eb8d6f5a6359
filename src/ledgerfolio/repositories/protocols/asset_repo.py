"""Asset registry protocol."""

from typing import Protocol, Optional

from ledgerfolio.domain.models import Asset


class AssetRepository(Protocol):
    """Interface for asset reference data (read-mostly)."""

    def create(self, asset: Asset) -> Asset:
        """Register a new asset."""
        ...

    def get_by_id(self, asset_id: str) -> Optional[Asset]:
        """Retrieve asset by ID."""
        ...

    def get_by_ticker(self, ticker: str) -> Optional[Asset]:
        """Retrieve asset by ticker (case-insensitive)."""
        ...

    def list_all(self) -> list[Asset]:
        """List all assets."""
        ...
