# debtrust - models
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

from __future__ import annotations

import enum
from typing import ClassVar

import pydantic

from debtrust.errors import DigestMissingError, PackageNotFoundError
from debtrust.logger import logger as root_logger

logger = root_logger.getChild("models")


class PipelineState(enum.StrEnum):
    START = "start"
    MANIFEST_FETCHED = "manifest-fetched"
    MANIFEST_VERIFIED = "manifest-verified"
    INDEX_FETCHED = "index-fetched"
    INDEX_VERIFIED = "index-verified"
    PACKAGE_FOUND = "package-found"
    ARTIFACT_FETCHED = "artifact-fetched"
    ARTIFACT_VERIFIED = "artifact-verified"
    FAILED = "failed"


class ReleaseManifest(pydantic.BaseModel):
    """
    Describe a repository's release file.

    Only ever built from bytes whose detached signature has been verified. Maps
    each index path (e.g., 'non-free/binary-amd64/Packages') to the SHA256 the
    release file vouches for.
    """

    model_config: ClassVar[pydantic.ConfigDict] = pydantic.ConfigDict(frozen=True)

    digests: dict[str, str]
    fields: dict[str, str] = pydantic.Field(default={})

    def __len__(self) -> int:
        return len(self.digests)

    def digest_for(self, path: str) -> str:
        """Obtain the expected digest for the index at `path`."""
        digest = self.digests.get(path)
        if digest is None:
            logger.error(f"release file has no sha256sum for '{path}'")
            raise DigestMissingError(path)
        return digest


class PackageRecord(pydantic.BaseModel):
    """A single package entry from a verified package index."""

    model_config: ClassVar[pydantic.ConfigDict] = pydantic.ConfigDict(frozen=True)

    package: str
    version: str
    filename: str
    sha256: str
    architecture: str | None = None
    size: int | None = None

    @property
    def display_name(self) -> str:
        # used for logging only, never for verification.
        _, sep, name = self.filename.rpartition("/")
        return name if sep else "???"


class PackageIndex(pydantic.BaseModel):
    model_config: ClassVar[pydantic.ConfigDict] = pydantic.ConfigDict(frozen=True)

    records: list[PackageRecord]

    def __len__(self) -> int:
        return len(self.records)

    def find(self, name: str) -> PackageRecord:
        """
        Find the package record named `name`.

        Names are matched exactly. Should the index list the same name more than
        once, the first record wins.
        """
        for record in self.records:
            if record.package == name:
                return record

        logger.error(f"repository didn't contain '{name}'")
        raise PackageNotFoundError(name)
