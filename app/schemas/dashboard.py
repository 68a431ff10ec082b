"""
Pydantic schemas for Dashboard endpoints.
"""
from datetime import datetime
from decimal import Decimal

from app.schemas.base import CamelModel


class DashboardMetrics(CamelModel):
    """Dashboard key metrics, computed per request."""
    total_sales: Decimal
    total_orders: int
    active_products: int
    new_customers: int
    low_stock_count: int
    pending_orders: int
    active_customers: int
    returns: int


class HealthCheck(CamelModel):
    """Health check response."""
    status: str  # 'healthy', 'degraded'
    version: str
    database: bool
    timestamp: datetime
