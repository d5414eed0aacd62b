from functools import lru_cache

import toml
from fastapi import Request

from variant_service.api.config import ApiSettings
from variant_service.core.paths import get_backend_root_dir
from variant_service.storage import (
    AssignmentRepository,
    InMemoryAssignmentRepository,
)


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings()


def get_app_settings(request: Request) -> ApiSettings:
    settings: ApiSettings = request.app.state.settings
    return settings


_repository: AssignmentRepository | None = None


def init_repository() -> AssignmentRepository:
    global _repository  # noqa: PLW0603
    _repository = InMemoryAssignmentRepository()
    return _repository


def get_repository() -> AssignmentRepository:
    assert _repository is not None, "Repository not initialized"
    return _repository


def get_version() -> str:
    root_dir = get_backend_root_dir()
    with open(root_dir / "pyproject.toml") as f:
        data = toml.load(f)

    version = data.get("project", {}).get("version")
    if not version:
        raise ValueError("Version not found in pyproject.toml")

    assert isinstance(version, str)
    return version
