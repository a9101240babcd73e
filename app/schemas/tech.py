from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class SkillResponse(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class TechCreate(BaseModel):
    name: str
    skills: list[str] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v_trimmed = v.strip()
        if len(v_trimmed) < 2:
            raise ValueError("Tech name must be at least 2 characters long")
        if len(v_trimmed) > 100:
            raise ValueError("Tech name must be at most 100 characters long")
        return v_trimmed

    @field_validator("skills")
    @classmethod
    def normalize_skills(cls, v: list[str]) -> list[str]:
        # Drop blanks and duplicates, keep first-seen order
        cleaned: list[str] = []
        for name in v:
            name = name.strip()
            if name and name not in cleaned:
                cleaned.append(name)
        return cleaned


class TechResponse(BaseModel):
    id: UUID
    name: str
    is_active: bool
    skills: list[SkillResponse] = []

    model_config = ConfigDict(from_attributes=True)


class TechListResponse(BaseModel):
    ok: bool = True
    techs: list[TechResponse]


class ServiceResponse(BaseModel):
    id: UUID
    name: str
    duration_minutes: int | None = None
    required_skills: list[SkillResponse] = []

    model_config = ConfigDict(from_attributes=True)


class ServiceListResponse(BaseModel):
    ok: bool = True
    services: list[ServiceResponse]
