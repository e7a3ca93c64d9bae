"""
Model update checks for on-device translation models.
"""

from dataclasses import dataclass
from typing import Optional

from translator_server.config.config import MODELS_MOUNT_PATH
from translator_server.database.models import ModelVersion
from translator_server.database.repositories import ModelVersionRepository


@dataclass
class UpdateCheck:
    """Result of comparing a client's model version to the latest release."""
    has_update: bool
    latest_version: Optional[str] = None
    description: Optional[str] = None
    download_url: Optional[str] = None


def build_download_url(file_name: str, mount_path: str = MODELS_MOUNT_PATH) -> str:
    return f"{mount_path.rstrip('/')}/{file_name}"


def compare_versions(current_version: Optional[str], latest: Optional[ModelVersion],
                     mount_path: str = MODELS_MOUNT_PATH) -> UpdateCheck:
    """Build the update answer for a client.

    The comparison is plain string inequality, not version ordering: a
    client that reports anything other than the latest version string,
    including a newer one or none at all, is offered the latest model.
    """
    if latest is None:
        return UpdateCheck(has_update=False)

    return UpdateCheck(
        has_update=current_version != latest.version,
        latest_version=latest.version,
        description=latest.description,
        download_url=build_download_url(latest.file_name, mount_path)
    )


class ModelUpdateService:
    """Answers "is there a newer model?" from the active model records."""

    def __init__(self, repository: ModelVersionRepository, mount_path: str = MODELS_MOUNT_PATH):
        self.repository = repository
        self.mount_path = mount_path

    async def check(self, current_version: Optional[str]) -> UpdateCheck:
        latest = await self.repository.get_latest_active()
        return compare_versions(current_version, latest, self.mount_path)
