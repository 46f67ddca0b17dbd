import logging
from datetime import datetime
from typing import AsyncIterator, List, Optional
from fastapi import FastAPI, Query, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware

# --- Imports ---
from fxjournal.config import Settings
from fxjournal.core.entities.analytics import AnalyticsRequest, AnalyticsResult, TimeWindow
from fxjournal.core.entities.outcome import DaySummary, OutcomeSummary
from fxjournal.core.errors import AccountNotFoundError, DataSourceError
from fxjournal.core.interfaces.datasource import IJournalSource
from fxjournal.core.services import AnalyticsService
from fxjournal.core.use_cases.analytics_calculator import compute_analytics
from fxjournal.infrastructure.cache.redis_service import RedisService
from fxjournal.infrastructure.gateways.in_memory import InMemoryJournalSource
from fxjournal.infrastructure.gateways.journal_api import JournalAPIGateway
from fxjournal.infrastructure.persistence.postgres_repo import PostgresJournalRepo

settings = Settings.from_env()

# Setup Logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger("fxjournal")

app = FastAPI(title="fxjournal API", version="1.0.0", description="Equity curve & performance analytics for the trading journal")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Dependency Injection ---

async def get_datasource() -> AsyncIterator[IJournalSource]:
    if settings.journal_api_url:
        gateway = JournalAPIGateway(
            settings.journal_api_url,
            token=settings.journal_api_token,
            page_size=settings.journal_page_size,
            timeout=settings.http_timeout_seconds,
        )
        try:
            yield gateway
        finally:
            await gateway.aclose()
    elif settings.database_url:
        yield PostgresJournalRepo(settings.database_url)
    else:
        yield InMemoryJournalSource()

_cache: Optional[RedisService] = None

def get_cache() -> RedisService:
    global _cache
    if _cache is None:
        _cache = RedisService(settings.redis_url, ttl_seconds=settings.cache_ttl_seconds)
    return _cache

def get_service(
    source: IJournalSource = Depends(get_datasource),
    cache: RedisService = Depends(get_cache),
) -> AnalyticsService:
    return AnalyticsService(
        source,
        cache=cache,
        max_labels=settings.max_chart_labels,
        breakeven_tolerance=settings.breakeven_tolerance,
    )

def _parse_window(window: str) -> TimeWindow:
    try:
        return TimeWindow.parse(window)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

def _as_http_error(e: Exception) -> HTTPException:
    if isinstance(e, AccountNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    logger.error(f"Journal data source failed: {e}")
    return HTTPException(status_code=502, detail="Journal data source unavailable")

# --- Endpoints ---

@app.get("/health")
async def health(source: IJournalSource = Depends(get_datasource)):
    return {"status": "healthy", "source": type(source).__name__}

@app.get("/v1/accounts/{account_id}/analytics", response_model=AnalyticsResult)
async def get_account_analytics(
    account_id: str,
    window: str = Query("ALL", description="WEEK, MONTH, YEAR or ALL (1W/1M/1Y also accepted)"),
    now: Optional[datetime] = Query(None, description="Reference time, defaults to server time"),
    service: AnalyticsService = Depends(get_service),
):
    """
    Balance, growth and equity curve for one account.
    Win/loss counters and the curve cover the window only.
    """
    selected = _parse_window(window)
    try:
        return await service.get_analytics(account_id, selected, now)
    except (AccountNotFoundError, DataSourceError) as e:
        raise _as_http_error(e)

@app.get("/v1/accounts/{account_id}/outcomes", response_model=OutcomeSummary)
async def get_account_outcomes(
    account_id: str,
    service: AnalyticsService = Depends(get_service),
):
    """
    WIN/LOSS/BREAKEVEN/OPEN counters as shown in the journal list
    (breakeven band from BREAKEVEN_TOLERANCE).
    """
    try:
        return await service.get_outcomes(account_id)
    except (AccountNotFoundError, DataSourceError) as e:
        raise _as_http_error(e)

@app.get("/v1/accounts/{account_id}/calendar", response_model=List[DaySummary])
async def get_account_calendar(
    account_id: str,
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    service: AnalyticsService = Depends(get_service),
):
    try:
        days = await service.get_calendar(account_id, year, month)
    except (AccountNotFoundError, DataSourceError) as e:
        raise _as_http_error(e)
    return list(days.values())

@app.post("/v1/analytics", response_model=AnalyticsResult)
async def post_analytics(request: AnalyticsRequest):
    """
    Compute analytics over trades supplied in the body. Nothing is fetched.
    """
    return compute_analytics(
        request.trades,
        request.starting_balance,
        request.window,
        request.now or datetime.now(),
        max_labels=settings.max_chart_labels,
    )
