"""Shared test configuration, pytest markers and sample records."""

from datetime import datetime

import pytest

from models.schemas.job import JobDetails
from models.schemas.resume import ResumeData
from services.scoring.registry import clear as clear_registry

NOW = datetime(2025, 6, 1)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: runs the full scoring pipeline end to end"
    )
    config.addinivalue_line(
        "markers", "api: exercises the HTTP surface through TestClient"
    )


@pytest.fixture(autouse=True)
def _fresh_registry():
    clear_registry()
    yield
    clear_registry()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def python_resume():
    return ResumeData.model_validate({
        "id": "resume-1",
        "title": "Python Developer",
        "fullName": "Alex Doe",
        "skills": "Python, Django, PostgreSQL, Docker",
        "workExperience": [
            {
                "jobtitle": "Senior Python Developer",
                "companyName": "Acme Software",
                "description": "Built REST APIs with Python and Django on PostgreSQL, deployed with Docker.",
                "startDate": "2018-01",
                "endDate": "present",
            },
        ],
        "education": [
            {"degree": "BSc", "school": "State University", "fieldOfStudy": "Computer Science",
             "graduationDate": "2017-06"},
        ],
        "projects": [
            {"name": "Inventory API", "description": "Django and PostgreSQL inventory service",
             "technologies": "Python, Django, PostgreSQL"},
        ],
    })


@pytest.fixture
def python_job():
    return JobDetails(
        company="Acme",
        job_title="Python Developer",
        job_description=(
            "We are hiring a Python developer. Required: Python and Django. "
            "You will build APIs with Django and PostgreSQL and ship them with Docker."
        ),
    )
