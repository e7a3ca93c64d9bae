"""
Unit tests for the training data and model update services.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from translator_server.database.models import ModelVersion, TrainingData
from translator_server.services.model_update_service import (
    ModelUpdateService, build_download_url, compare_versions
)
from translator_server.services.training_data_service import REQUIRED_FIELDS_MESSAGE, TrainingDataService
from translator_server.utils.exceptions import ValidationError


def make_release(version: str = "1.2.0", file_name: str = "model-1.2.0.tflite", description=None):
    return ModelVersion(
        id=uuid4(),
        version=version,
        file_name=file_name,
        description=description,
        release_date=datetime.now(timezone.utc),
        is_active=True
    )


class TestTrainingDataService:
    """Test TrainingDataService functionality."""

    @pytest.fixture
    def repository(self):
        repository = AsyncMock()
        repository.add_pair.side_effect = lambda english, myanmar: TrainingData(
            id=uuid4(), english=english, myanmar=myanmar,
            timestamp=datetime.now(timezone.utc), synced=True
        )
        return repository

    @pytest.mark.asyncio
    async def test_submit_stores_pair(self, repository):
        service = TrainingDataService(repository)

        record = await service.submit("Hello", "မင်္ဂလာပါ")

        repository.add_pair.assert_awaited_once_with("Hello", "မင်္ဂလာပါ")
        assert record.english == "Hello"
        assert record.synced is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("english,myanmar", [
        (None, "မင်္ဂလာပါ"),
        ("Hello", None),
        ("", "မင်္ဂလာပါ"),
        ("Hello", ""),
        (0, "မင်္ဂလာပါ"),
        (None, None)
    ])
    async def test_submit_rejects_missing_text(self, repository, english, myanmar):
        service = TrainingDataService(repository)

        with pytest.raises(ValidationError) as exc_info:
            await service.submit(english, myanmar)

        assert exc_info.value.message == REQUIRED_FIELDS_MESSAGE
        repository.add_pair.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_whitespace_only_text_is_accepted(self, repository):
        service = TrainingDataService(repository)

        record = await service.submit(" ", " ")

        assert record.english == " "

    @pytest.mark.asyncio
    async def test_list_all(self, repository):
        repository.list_newest_first.return_value = []
        service = TrainingDataService(repository)

        assert await service.list_all() == []
        repository.list_newest_first.assert_awaited_once()


class TestCompareVersions:
    """Test the update decision."""

    def test_no_release(self):
        result = compare_versions("1.0.0", None)

        assert result.has_update is False
        assert result.latest_version is None
        assert result.download_url is None

    def test_same_version(self):
        result = compare_versions("1.2.0", make_release())

        assert result.has_update is False
        assert result.latest_version == "1.2.0"
        assert result.download_url == "/models/model-1.2.0.tflite"

    def test_older_version(self):
        result = compare_versions("1.0.0", make_release(description="Better accuracy"))

        assert result.has_update is True
        assert result.description == "Better accuracy"

    def test_newer_client_version_is_still_offered_latest(self):
        result = compare_versions("2.0.0", make_release())

        assert result.has_update is True
        assert result.latest_version == "1.2.0"

    def test_missing_client_version(self):
        assert compare_versions(None, make_release()).has_update is True

    def test_comparison_is_exact(self):
        assert compare_versions("1.2", make_release(version="1.2.0")).has_update is True
        assert compare_versions("1.2.0 ", make_release(version="1.2.0")).has_update is True

    def test_download_url(self):
        assert build_download_url("m.bin") == "/models/m.bin"
        assert build_download_url("m.bin", "/files/") == "/files/m.bin"


class TestModelUpdateService:
    """Test ModelUpdateService functionality."""

    @pytest.mark.asyncio
    async def test_check_uses_latest_active_release(self):
        repository = AsyncMock()
        repository.get_latest_active.return_value = make_release(version="3.0")
        service = ModelUpdateService(repository)

        result = await service.check("2.0")

        assert result.has_update is True
        assert result.latest_version == "3.0"
        repository.get_latest_active.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_check_without_releases(self):
        repository = AsyncMock()
        repository.get_latest_active.return_value = None

        result = await ModelUpdateService(repository).check("1.0")

        assert result.has_update is False
