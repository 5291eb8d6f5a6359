"""Holdings and cash view endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ledgerfolio.api.deps import get_view_service
from ledgerfolio.api.schemas import PortfolioViewResponse, ReplayViewResponse
from ledgerfolio.services import PortfolioViewService

router = APIRouter(prefix="/views", tags=["views"])


@router.get("/portfolios", response_model=list[PortfolioViewResponse])
def list_portfolio_views(
    as_of: Optional[date] = Query(None, description="Include records up to this date"),
    views: PortfolioViewService = Depends(get_view_service),
) -> list[PortfolioViewResponse]:
    """Holdings and cash for every portfolio."""
    return [
        PortfolioViewResponse.from_portfolio_view(pv)
        for pv in views.list_portfolio_views(as_of=as_of)
    ]


@router.get("/portfolios/{portfolio_id}", response_model=PortfolioViewResponse)
def get_portfolio_view(
    portfolio_id: str,
    as_of: Optional[date] = Query(None, description="Include records up to this date"),
    views: PortfolioViewService = Depends(get_view_service),
) -> PortfolioViewResponse:
    """Holdings and cash for one portfolio."""
    return PortfolioViewResponse.from_portfolio_view(
        views.get_portfolio_view(portfolio_id, as_of=as_of)
    )


@router.get("/summary", response_model=ReplayViewResponse)
def get_summary(
    as_of: Optional[date] = Query(None, description="Include records up to this date"),
    views: PortfolioViewService = Depends(get_view_service),
) -> ReplayViewResponse:
    """Holdings and cash with all portfolios pooled."""
    return ReplayViewResponse.from_view(views.get_global_view(as_of=as_of))
