# api/dependencies.py
from datetime import date
from typing import Callable

from fastapi import Depends

from core.sa.database import Database, get_database
from core.services.accounts import AccountService
from core.services.catalog import CatalogService
from core.services.circulation import CirculationService
from core.services.fine_policy import FinePolicy
from core.services.fines import FineAggregator


def get_clock() -> Callable[[], date]:
    """Source of "today" for issue dates and fine previews"""
    return date.today


def get_fine_policy() -> FinePolicy:
    return FinePolicy.from_settings()


def get_circulation_service(
    database: Database = Depends(get_database),
    policy: FinePolicy = Depends(get_fine_policy),
    clock: Callable[[], date] = Depends(get_clock)
) -> CirculationService:
    return CirculationService(database, policy=policy, clock=clock)


def get_catalog_service(
    database: Database = Depends(get_database),
    policy: FinePolicy = Depends(get_fine_policy),
    clock: Callable[[], date] = Depends(get_clock)
) -> CatalogService:
    return CatalogService(database, policy=policy, clock=clock)


def get_fine_aggregator(
    database: Database = Depends(get_database),
    policy: FinePolicy = Depends(get_fine_policy),
    clock: Callable[[], date] = Depends(get_clock)
) -> FineAggregator:
    return FineAggregator(database, policy=policy, clock=clock)


def get_account_service(database: Database = Depends(get_database)) -> AccountService:
    return AccountService(database)
