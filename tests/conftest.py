"""Pytest configuration and fixtures for say10 tests."""

import json

import pytest

from say10.config import Settings
from say10.safety.models import ApprovalRequest, ApprovalResponse
from say10.safety.service import ApprovalService
from say10.safety.whitelist import WhitelistStore


@pytest.fixture
def write_whitelist(tmp_path):
    """Write a whitelist JSON file and return its path."""

    def _write(commands=None, patterns=None, raw: str | None = None):
        path = tmp_path / "whitelist.json"
        if raw is not None:
            path.write_text(raw, encoding="utf-8")
        else:
            path.write_text(
                json.dumps({"commands": commands or [], "patterns": patterns or []}),
                encoding="utf-8",
            )
        return path

    return _write


@pytest.fixture
def missing_whitelist_store(tmp_path):
    """Whitelist store pointing at a file that does not exist."""
    return WhitelistStore(tmp_path / "missing.json")


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings with an isolated data directory."""
    return Settings(
        say10_data_dir=tmp_path,
        whitelist_path=tmp_path / "whitelist.json",
        say10_log_level="DEBUG",
    )


class RecordingHandler:
    """Approval handler that records requests and answers with a fixed decision."""

    def __init__(self, approved: bool = True):
        self.approved = approved
        self.requests: list[ApprovalRequest] = []

    async def __call__(self, request: ApprovalRequest) -> ApprovalResponse:
        self.requests.append(request)
        if self.approved:
            return ApprovalResponse.approve()
        return ApprovalResponse.deny("Denied in test")


@pytest.fixture
def approving_handler():
    """Handler that approves everything."""
    return RecordingHandler(approved=True)


@pytest.fixture
def denying_handler():
    """Handler that denies everything."""
    return RecordingHandler(approved=False)


@pytest.fixture
def service(missing_whitelist_store):
    """Approval service using the default whitelist and no handler."""
    return ApprovalService(whitelist=missing_whitelist_store)
