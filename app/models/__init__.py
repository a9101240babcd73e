# app/models/__init__.py
# Import every model so Base.metadata is complete for create_all and Alembic.
from app.models.tenant import Tenant
from app.models.user import User
from app.models.tech import Skill, Tech, tech_skills
from app.models.service import Service, service_required_skills
from app.models.appointment import Appointment, AppointmentSource, AppointmentStatus
