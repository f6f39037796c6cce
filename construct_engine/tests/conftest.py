"""Shared fixtures for construct engine tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from construct_engine.constructs.api_check import ApiCheckRequest
from construct_engine.constructs.check import CheckConfigDefaults
from construct_engine.constructs.project import Project
from construct_engine.session import Session


@pytest.fixture
def project() -> Project:
    return Project("shop-monitoring", name="Shop monitoring", repo_url="https://github.com/acme/shop")


@pytest.fixture
def session(project: Project, tmp_path: Path) -> Session:
    """A session with no defaults, bound to a check file inside *tmp_path*."""
    return Session(project=project, check_file_path="checks/home.check.py", base_path=tmp_path)


@pytest.fixture
def defaults() -> CheckConfigDefaults:
    return CheckConfigDefaults(
        activated=True,
        locations=["us-east-1", "eu-west-1"],
        tags=["mac"],
        runtime_id="2022.10",
        frequency=10,
    )


@pytest.fixture
def api_request() -> ApiCheckRequest:
    return ApiCheckRequest(url="https://shop.example.com/api/health")
