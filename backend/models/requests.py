from typing import Any

from pydantic import BaseModel, Field


class ScoreRequest(BaseModel):
    resume: dict[str, Any] = Field(..., description="Resume record in camelCase or legacy shape")
    job: dict[str, Any] = Field(..., description="Job record: company, jobTitle, jobDescription")
