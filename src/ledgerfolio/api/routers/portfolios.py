"""Portfolio management endpoints."""

from fastapi import APIRouter, Depends

from ledgerfolio.api.deps import get_ledger_service
from ledgerfolio.api.schemas import PortfolioCreate, PortfolioResponse, PortfolioListResponse
from ledgerfolio.services import LedgerService

router = APIRouter(prefix="/portfolios", tags=["portfolios"])


@router.post("", response_model=PortfolioResponse, status_code=201)
def create_portfolio(
    data: PortfolioCreate,
    ledger: LedgerService = Depends(get_ledger_service),
) -> PortfolioResponse:
    """Create a new portfolio."""
    portfolio = ledger.create_portfolio(name=data.name, base_currency=data.base_currency)
    return PortfolioResponse.model_validate(portfolio)


@router.get("", response_model=PortfolioListResponse)
def list_portfolios(
    ledger: LedgerService = Depends(get_ledger_service),
) -> PortfolioListResponse:
    """List all portfolios."""
    portfolios = ledger.list_portfolios()
    return PortfolioListResponse(
        portfolios=[PortfolioResponse.model_validate(p) for p in portfolios],
        count=len(portfolios),
    )


@router.get("/{portfolio_id}", response_model=PortfolioResponse)
def get_portfolio(
    portfolio_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> PortfolioResponse:
    """Get a portfolio by ID."""
    return PortfolioResponse.model_validate(ledger.get_portfolio(portfolio_id))
