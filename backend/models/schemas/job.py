"""Job descriptor consumed by the scoring engine."""

from pydantic import AliasChoices, BaseModel, Field


class JobDetails(BaseModel):
    company: str = ""
    job_title: str = Field("", validation_alias=AliasChoices("job_title", "jobTitle", "title"))
    job_description: str = Field(
        "", validation_alias=AliasChoices("job_description", "jobDescription", "description")
    )

    @property
    def full_text(self) -> str:
        return f"{self.job_title}\n{self.job_description}".strip()
