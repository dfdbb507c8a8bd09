"""Prometheus metrics exporter."""

from braavos.exporter.app import create_app, read_account, read_all_accounts
from braavos.exporter.metrics import (
    check_metric_names,
    metric_names,
    metric_prefix,
    register_account,
    render_metrics,
)

__all__ = [
    "check_metric_names",
    "create_app",
    "metric_names",
    "metric_prefix",
    "read_account",
    "read_all_accounts",
    "register_account",
    "render_metrics",
]
