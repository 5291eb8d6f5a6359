"""Portfolio repository protocol."""

from typing import Protocol, Optional

from ledgerfolio.domain.models import Portfolio


class PortfolioRepository(Protocol):
    """Interface for portfolio data access."""

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Persist a new portfolio."""
        ...

    def get_by_id(self, portfolio_id: str) -> Optional[Portfolio]:
        """Retrieve portfolio by ID."""
        ...

    def get_by_name(self, name: str) -> Optional[Portfolio]:
        """Retrieve portfolio by name."""
        ...

    def list_all(self) -> list[Portfolio]:
        """List all portfolios."""
        ...
