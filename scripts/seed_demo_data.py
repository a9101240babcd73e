#!/usr/bin/env python3
# scripts/seed_demo_data.py
"""
Seed a demo shop: tenant, one user per role, techs with skills, services
and a day of appointments.

Idempotent: if the demo tenant already exists nothing is written.

Examples:
  python -m scripts.seed_demo_data --seed
  python -m scripts.seed_demo_data --seed --day 2026-10-19 --password "Demo@12345"
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import SessionLocal, engine
from app.core.permissions import Role
from app.core.security import get_password_hash
from app.models import Appointment, Service, Skill, Tech, Tenant, User
from app.models.base import Base
from app.utils.datetime_utils import get_zone

logger = logging.getLogger(__name__)

DEMO_TENANT_NAME = "Patriot Auto (demo)"

DEMO_TECHS = {
    "Alex Rivera": ["Brakes", "Diagnostics"],
    "Jordan Lee": ["Oil & Fluids", "Tires"],
    "Sam Patel": ["Diagnostics", "Electrical"],
}

DEMO_SERVICES = [
    ("Oil change", 30, ["Oil & Fluids"]),
    ("Brake inspection", 60, ["Brakes"]),
    ("Tire rotation", 45, ["Tires"]),
    ("Check engine light", 90, ["Diagnostics", "Electrical"]),
]

# (tech, service, start "HH:MM", minutes)
DEMO_BOOKINGS = [
    ("Alex Rivera", "Brake inspection", "08:00", 60),
    ("Alex Rivera", "Check engine light", "10:30", 90),
    ("Jordan Lee", "Oil change", "09:00", 30),
    ("Jordan Lee", "Tire rotation", "09:00", 45),
    ("Sam Patel", "Check engine light", "13:00", 120),
]


def seed(db: Session, *, day: date, password: str) -> None:
    existing = db.query(Tenant).filter(Tenant.name == DEMO_TENANT_NAME).first()
    if existing:
        print(f"Demo tenant exists ({existing.id}), nothing to do")
        return

    settings = get_settings()
    zone = get_zone(settings.shop_timezone)

    tenant = Tenant(name=DEMO_TENANT_NAME)
    db.add(tenant)
    db.flush()

    hashed = get_password_hash(password)
    for role in Role:
        db.add(User(tenant_id=tenant.id, email=f"{role.value.lower()}@patriot-demo.com", hashed_password=hashed, role=role))

    skills: dict[str, Skill] = {}

    def skill(name: str) -> Skill:
        if name not in skills:
            skills[name] = Skill(tenant_id=tenant.id, name=name)
            db.add(skills[name])
        return skills[name]

    techs = {}
    for name, skill_names in DEMO_TECHS.items():
        techs[name] = Tech(tenant_id=tenant.id, name=name, skills=[skill(s) for s in skill_names])
        db.add(techs[name])

    services = {}
    for name, minutes, skill_names in DEMO_SERVICES:
        services[name] = Service(
            tenant_id=tenant.id,
            name=name,
            duration_minutes=minutes,
            required_skills=[skill(s) for s in skill_names],
        )
        db.add(services[name])
    db.flush()

    for tech_name, service_name, start_clock, minutes in DEMO_BOOKINGS:
        start = datetime.combine(day, time.fromisoformat(start_clock), tzinfo=zone).astimezone(timezone.utc)
        db.add(
            Appointment(
                tenant_id=tenant.id,
                title=service_name,
                start_time=start,
                end_time=start + timedelta(minutes=minutes),
                tech_id=techs[tech_name].id,
                service_id=services[service_name].id,
            )
        )

    db.commit()
    print(f"Seeded demo tenant {tenant.id} with {len(DEMO_BOOKINGS)} appointment(s) on {day.isoformat()}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed Patriot Scheduler demo data")
    parser.add_argument("--seed", action="store_true", help="Create demo tenant, users, techs and appointments")
    parser.add_argument("--create-tables", action="store_true", help="Create tables directly (no Alembic)")
    parser.add_argument("--day", type=date.fromisoformat, default=date.today(), help="Day to book (YYYY-MM-DD)")
    parser.add_argument("--password", default="Demo@12345", help="Password for every demo user")
    args = parser.parse_args()

    if not (args.seed or args.create_tables):
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(level=logging.INFO)

    if args.create_tables:
        Base.metadata.create_all(bind=engine)
        print("Tables created")

    if args.seed:
        db = SessionLocal()
        try:
            seed(db, day=args.day, password=args.password)
        except Exception:
            db.rollback()
            logger.exception("Seeding failed")
            raise
        finally:
            db.close()


if __name__ == "__main__":
    main()
