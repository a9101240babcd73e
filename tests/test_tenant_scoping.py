"""Tests for tenant-filtered queries and shop-timezone date handling."""

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from app.core.tenant_db import tenant_query
from app.models import Appointment, Tech, Tenant
from app.services.appointment_service import list_appointments
from app.services.scheduler_service import appointment_to_snapshot
from app.utils.datetime_utils import as_utc, day_range_utc, days_between
from tests.helpers import TEST_DAY, at


class TestTenantQuery:
    def test_requires_tenant_id(self, db_session):
        with pytest.raises(ValueError):
            tenant_query(db_session, Tech, None)

    def test_rejects_models_without_tenant(self, db_session):
        with pytest.raises(TypeError):
            tenant_query(db_session, Tenant, uuid4())

    def test_filters_rows(self, db_session, tenant, other_tenant, make_tech):
        make_tech(tenant, "Alex")
        make_tech(other_tenant, "Spy")

        names = [t.name for t in tenant_query(db_session, Tech, tenant.id).all()]

        assert names == ["Alex"]


class TestShopTimezone:
    def test_day_range_in_utc_shop(self):
        start, end = day_range_utc(TEST_DAY, TEST_DAY, "UTC")

        assert start == datetime(2026, 10, 19, tzinfo=timezone.utc)
        assert end == datetime(2026, 10, 19, 23, 59, 59, 999000, tzinfo=timezone.utc)

    def test_day_range_follows_shop_zone(self):
        # 2026-10-19 is EDT (UTC-4)
        start, end = day_range_utc(TEST_DAY, TEST_DAY, "America/New_York")

        assert start == datetime(2026, 10, 19, 4, 0, tzinfo=timezone.utc)
        assert end == datetime(2026, 10, 20, 3, 59, 59, 999000, tzinfo=timezone.utc)

    def test_naive_is_treated_as_utc(self):
        assert as_utc(datetime(2026, 10, 19, 9, 0)) == datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

    def test_days_between_is_inclusive(self):
        assert days_between(date(2026, 10, 19), date(2026, 10, 19)) == 1
        assert days_between(date(2026, 10, 1), date(2026, 10, 31)) == 31

    def test_snapshot_uses_shop_wall_clock(self, db_session, tenant, make_tech, make_appointment):
        tech = make_tech(tenant, "Alex")
        # 13:00 UTC is 09:00 in New York on the test day
        make_appointment(tech, at("13:00"), at("13:30"))

        [appointment] = list_appointments(
            db_session,
            tenant_id=tenant.id,
            start_date=TEST_DAY,
            end_date=TEST_DAY,
            tz_name="America/New_York",
        )
        snapshot = appointment_to_snapshot(appointment, "America/New_York")

        assert (snapshot.start_time.hour, snapshot.start_time.minute) == (9, 0)
        assert snapshot.resource_id == tech.id
        assert snapshot.status == "SCHEDULED"

    def test_appointments_are_read_not_written(self, db_session, tenant, make_tech, make_appointment):
        tech = make_tech(tenant, "Alex")
        make_appointment(tech, at("09:00"), at("10:00"))

        list_appointments(db_session, tenant_id=tenant.id, start_date=TEST_DAY, end_date=TEST_DAY, tz_name="UTC")

        assert not db_session.dirty
        assert db_session.query(Appointment).count() == 1
