# app/core/tenant_db.py
"""
Tenant-scoped query helper.

- Every tenant-owned table carries a tenant_id column.
- Services never build a query on such a table without going through
  tenant_query, so the tenant filter is part of the query itself.
"""

from __future__ import annotations

from typing import TypeVar
from uuid import UUID

from sqlalchemy.orm import Query, Session

from app.models.base import TenantScopedMixin

ModelT = TypeVar("ModelT", bound=TenantScopedMixin)


def tenant_query(db: Session, model: type[ModelT], tenant_id: UUID) -> Query:
    """
    Start a query on a tenant-owned model, already filtered to one tenant.

    tenant_id is required and must not be None.
    """
    if tenant_id is None:
        raise ValueError("tenant_id is required for tenant-scoped queries")
    if not issubclass(model, TenantScopedMixin):
        raise TypeError(f"{model.__name__} is not a tenant-scoped model")
    return db.query(model).filter(model.tenant_id == tenant_id)
