"""Candidate profile records consumed by the scoring engine.

`ResumeData.model_validate(record)` is the single boundary adapter: it
accepts both the current camelCase persistence shape and the legacy shape
(`jobtitle`/`companyName` work entries, comma-separated skill strings,
`{"skills_": "..."}` skill blobs) and yields one normalized record, so
the engine never has to check which fields a record happens to carry.
"""

from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator


def split_csv(value: Any) -> list[str]:
    """Turn a comma string, list, or `{"skills_": ...}` blob into a clean list."""
    if value is None:
        return []
    if isinstance(value, dict):
        value = value.get("skills_") or value.get("skills") or []
    if isinstance(value, str):
        value = value.split(",")
    return [str(v).strip() for v in value if str(v).strip()]


def date_to_str(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if value == "":
        return None
    return value


class WorkExperienceEntry(BaseModel):
    """One held position. A missing end date means the role is current."""
    title: str = Field("", validation_alias=AliasChoices("title", "jobtitle", "jobTitle", "job_title"))
    company: str = Field("", validation_alias=AliasChoices("company", "companyName", "company_name"))
    description: str = ""
    start_date: str | None = Field(None, validation_alias=AliasChoices("start_date", "startDate"))
    end_date: str | None = Field(None, validation_alias=AliasChoices("end_date", "endDate"))
    skills: list[str] = []
    achievements: list[str] = []

    @field_validator("skills", "achievements", mode="before")
    @classmethod
    def _split_lists(cls, value: Any) -> list[str]:
        return split_csv(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, value: Any) -> Any:
        return date_to_str(value)


class EducationEntry(BaseModel):
    degree: str = ""
    institution: str = Field("", validation_alias=AliasChoices("institution", "school"))
    field: str = Field("", validation_alias=AliasChoices("field", "fieldOfStudy", "field_of_study", "major"))
    start_date: str | None = Field(None, validation_alias=AliasChoices("start_date", "startDate"))
    end_date: str | None = Field(
        None, validation_alias=AliasChoices("end_date", "endDate", "graduationDate", "graduation_date")
    )

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, value: Any) -> Any:
        return date_to_str(value)


class ProjectEntry(BaseModel):
    name: str = Field("", validation_alias=AliasChoices("name", "title"))
    description: str = ""
    technologies: list[str] = Field([], validation_alias=AliasChoices("technologies", "skills", "techStack"))

    @field_validator("technologies", mode="before")
    @classmethod
    def _split_technologies(cls, value: Any) -> list[str]:
        return split_csv(value)


class ResumeData(BaseModel):
    """Normalized resume record."""
    id: str | None = Field(None, validation_alias=AliasChoices("id", "_id", "resumeId", "resume_id"))
    title: str = ""  # headline / current professional title
    full_name: str = Field("", validation_alias=AliasChoices("full_name", "fullName", "name"))
    email: str = ""
    skills: list[str] = []
    work_experience: list[WorkExperienceEntry] = Field(
        [], validation_alias=AliasChoices("work_experience", "workExperience", "experience")
    )
    education: list[EducationEntry] = []
    projects: list[ProjectEntry] = []
    certifications: list[str] = []

    @field_validator("skills", "certifications", mode="before")
    @classmethod
    def _split_lists(cls, value: Any) -> list[str]:
        return split_csv(value)

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        return str(value) if value is not None else None

    @field_validator("title", "full_name", "email", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return value or ""
