"""
Analysis Package

Derived figures over ledger snapshots: balances and dashboard metrics,
anomaly detection, and pandas reports and export.
"""

from .aggregator import (
    DashboardMetrics,
    Insight,
    account_balance,
    account_balances,
    cash_flow_insight,
    dashboard_insights,
    dashboard_metrics,
    expense_ratio,
    fixed_cost_projection,
    monthly_expense,
    monthly_income,
    profit_margin,
    runway_months,
    safe_balance,
    top_expense_category,
    top_expense_insight,
    total_balance,
    upcoming_bills,
)
from .anomalies import AnomalyDetector, DetectionRules, rescan
from .reports import (
    account_breakdown,
    category_breakdown,
    export_transactions_csv,
    monthly_summary,
    transactions_frame,
)

__all__ = [
    "AnomalyDetector",
    "DashboardMetrics",
    "DetectionRules",
    "Insight",
    "account_balance",
    "account_balances",
    "account_breakdown",
    "category_breakdown",
    "cash_flow_insight",
    "dashboard_insights",
    "dashboard_metrics",
    "export_transactions_csv",
    "expense_ratio",
    "fixed_cost_projection",
    "monthly_expense",
    "monthly_income",
    "monthly_summary",
    "profit_margin",
    "rescan",
    "runway_months",
    "safe_balance",
    "top_expense_category",
    "top_expense_insight",
    "total_balance",
    "transactions_frame",
    "upcoming_bills",
]
