from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from tests.models import Account, User


@pytest.fixture
def user() -> User:
    return User(user_id=7, name="Ada", email=None, salt=b"\x01\x02")


@pytest.fixture
def account() -> Account:
    return Account(UserId=1, Salt=[3, 1, 4], Nickname=None)


@pytest.fixture
def write_yaml(tmp_path: Path):
    """Return a helper that writes dedented YAML into the temp directory."""

    def _write(content: str, name: str = "projection.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
