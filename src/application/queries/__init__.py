"""Queries - Read operations that fetch data.

Queries represent a request for information. They are immutable dataclasses
with question-like names (GetSubscription, ListInvoices).

Each query has a corresponding handler that fetches and returns the requested
data. Queries NEVER change state.
"""

from src.application.queries.billing_queries import (
    GetInvoice,
    GetSubscription,
    ListInvoices,
)
from src.application.queries.project_queries import GetProject, ListProjects

__all__ = [
    "GetInvoice",
    "GetProject",
    "GetSubscription",
    "ListInvoices",
    "ListProjects",
]
