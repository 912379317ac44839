# debtrust - tests - fixtures
# Copyright (C) 2025  Clyso GmbH
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

from pathlib import Path

import pytest
from helpers import (
    BASE_URL,
    DEB,
    DEB_FILENAME,
    FakeTransport,
    FakeVerifier,
    make_packages,
    make_release,
)

from debtrust.config import RepoConfig


@pytest.fixture
def config() -> RepoConfig:
    return RepoConfig(base_url=BASE_URL)


@pytest.fixture
def keyring(tmp_path: Path) -> Path:
    path = tmp_path / "keyring.gpg"
    _ = path.write_bytes(b"keyring")
    return path


@pytest.fixture
def repo_contents(config: RepoConfig) -> dict[str, bytes]:
    packages = make_packages().encode("utf-8")
    release = make_release(
        {
            "non-free/binary-i386/Packages": b"other index",
            config.index_path: packages,
        }
    ).encode("utf-8")

    return {
        config.release_url: release,
        config.release_sig_url: b"signature",
        config.index_url: packages,
        config.artifact_url(DEB_FILENAME): DEB,
    }


@pytest.fixture
def transport(repo_contents: dict[str, bytes]) -> FakeTransport:
    return FakeTransport(contents=repo_contents)


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier()
