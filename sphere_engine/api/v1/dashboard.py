"""/v1/dashboard - full derived state from a snapshot"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from sphere_engine.api.v1.schemas import DashboardResponse, SnapshotRequest
from sphere_engine.api.dependencies import get_engine_policy, get_request_id, get_sphere_client
from sphere_engine.domain.dashboard import Dashboard, EnginePolicy, FinancialSnapshot, compute_dashboard
from sphere_engine.domain.exceptions import DataSourceError, InvalidRecordError
from sphere_engine.infrastructure.clients.sphere_api import SphereAPIClient
from sphere_engine.infrastructure.observability.metrics import record_dashboard, data_source_failures_counter
from sphere_engine.infrastructure.observability.logging import log_dashboard

router = APIRouter()


def _compute(
    snapshot: FinancialSnapshot,
    as_of: Optional[date],
    policy: EnginePolicy,
    request_id: str,
    source: str,
    start_time: float,
) -> DashboardResponse:
    result: Dashboard = compute_dashboard(snapshot, as_of, policy)

    duration_ms = (time.time() - start_time) * 1000
    record_dashboard(source, result.safe_to_spend.is_clamped)
    log_dashboard(
        request_id,
        source,
        len(snapshot.transactions),
        result.safe_to_spend.amount,
        result.safe_to_spend.is_clamped,
        duration_ms,
    )

    return DashboardResponse.model_validate(result)


@router.post("/dashboard", response_model=DashboardResponse)
def create_dashboard(
    body: SnapshotRequest,
    request: Request,
    policy: EnginePolicy = Depends(get_engine_policy),
):
    """
    Compute every dashboard figure from a snapshot supplied by the caller.

    The snapshot must be self-consistent: budget pace, debts and safe-to-spend
    are all derived from the same records.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    return _compute(body.to_snapshot(), body.as_of, policy, request_id, "request", start_time)


@router.get("/dashboard", response_model=DashboardResponse)
async def fetch_dashboard(
    request: Request,
    as_of: Optional[date] = None,
    policy: EnginePolicy = Depends(get_engine_policy),
    sphere_client: SphereAPIClient = Depends(get_sphere_client),
):
    """
    Fetch the snapshot from the Sphere data source, then compute the dashboard.

    Flow:
    1. Fetch accounts, transactions, liabilities, bills, vaults and profile
    2. Map raw rows to domain records (direction normalized on the way in)
    3. Run every calculator over the snapshot
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        snapshot = await sphere_client.fetch_snapshot(today=as_of)
    except DataSourceError as e:
        data_source_failures_counter.inc()
        logging.error(f"Data source error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Sphere data source unavailable")
    except InvalidRecordError as e:
        logging.warning(f"Invalid record: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return _compute(snapshot, as_of, policy, request_id, "data_source", start_time)
