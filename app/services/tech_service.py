# app/services/tech_service.py
"""
Technician, skill and service lookups.

All reads are tenant-filtered through tenant_query.
"""

from uuid import UUID

from sqlalchemy.orm import Session

from app.core.tenant_db import tenant_query
from app.models.service import Service
from app.models.tech import Skill, Tech
from app.schemas.tech import TechCreate


def list_techs(db: Session, *, tenant_id: UUID, include_inactive: bool = False) -> list[Tech]:
    """
    Techs for one tenant, ordered by name. This order becomes the grid's column order.
    """
    query = tenant_query(db, Tech, tenant_id)
    if not include_inactive:
        query = query.filter(Tech.is_active.is_(True))
    return query.order_by(Tech.name, Tech.id).all()


def get_tech(db: Session, *, tenant_id: UUID, tech_id: UUID) -> Tech | None:
    return tenant_query(db, Tech, tenant_id).filter(Tech.id == tech_id).first()


def _get_or_create_skills(db: Session, *, tenant_id: UUID, names: list[str]) -> list[Skill]:
    if not names:
        return []

    existing = {
        skill.name: skill
        for skill in tenant_query(db, Skill, tenant_id).filter(Skill.name.in_(names)).all()
    }
    skills = []
    for name in names:
        skill = existing.get(name)
        if skill is None:
            skill = Skill(tenant_id=tenant_id, name=name)
            db.add(skill)
        skills.append(skill)
    return skills


def create_tech(db: Session, *, tenant_id: UUID, tech_in: TechCreate) -> Tech:
    tech = Tech(
        tenant_id=tenant_id,
        name=tech_in.name,
        is_active=True,
    )
    tech.skills = _get_or_create_skills(db, tenant_id=tenant_id, names=tech_in.skills)
    db.add(tech)
    db.flush()
    return tech


def list_services(db: Session, *, tenant_id: UUID) -> list[Service]:
    return tenant_query(db, Service, tenant_id).order_by(Service.name).all()


def get_service(db: Session, *, tenant_id: UUID, service_id: UUID) -> Service | None:
    return tenant_query(db, Service, tenant_id).filter(Service.id == service_id).first()
