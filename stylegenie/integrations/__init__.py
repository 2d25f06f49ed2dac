"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_looks_store,
    check_vision,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_looks_store",
    "check_vision",
    "run_all_checks",
]
