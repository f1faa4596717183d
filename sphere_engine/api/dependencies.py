"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from sphere_engine.config import settings
from sphere_engine.domain.dashboard import EnginePolicy
from sphere_engine.infrastructure.clients.sphere_api import SphereAPIClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_sphere_client() -> SphereAPIClient:
    """Provide Sphere API client instance"""
    return SphereAPIClient()


def get_engine_policy() -> EnginePolicy:
    """Engine thresholds from configuration"""
    return EnginePolicy(
        horizon_days=settings.safe_to_spend_horizon_days,
        pace_tolerance_pct=settings.pace_tolerance_pct,
        pace_warning_threshold_pct=settings.pace_warning_threshold_pct,
        near_limit_pct=settings.near_limit_pct,
        urgent_days=settings.urgent_days,
        soon_days=settings.soon_days,
        high_utilization_pct=settings.high_utilization_pct,
        annual_return_pct=settings.default_annual_return_pct,
        monthly_contribution=settings.default_monthly_contribution,
    )
