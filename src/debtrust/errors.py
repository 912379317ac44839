# debtrust - errors
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

import enum
from typing import override


class DebTrustError(Exception):
    msg: str | None

    def __init__(self, msg: str | None = None) -> None:
        super().__init__()
        self.msg = msg

    @override
    def __str__(self) -> str:
        return "debtrust error" + (f": {self.msg}" if self.msg is not None else "")


class ConfigError(DebTrustError):
    @override
    def __str__(self) -> str:
        return "config error" + (f": {self.msg}" if self.msg else "")


class CommandError(DebTrustError):
    @override
    def __str__(self) -> str:
        return "command error" + (f": {self.msg}" if self.msg else "")


class TransportError(DebTrustError):
    @override
    def __str__(self) -> str:
        return "transport error" + (f": {self.msg}" if self.msg else "")


class TemporaryStorageError(DebTrustError):
    @override
    def __str__(self) -> str:
        return "temporary storage error" + (f": {self.msg}" if self.msg else "")


class SignatureInvalidError(DebTrustError):
    @override
    def __str__(self) -> str:
        return "invalid signature" + (f": {self.msg}" if self.msg else "")


class DecodeError(DebTrustError):
    @override
    def __str__(self) -> str:
        return "decode error" + (f": {self.msg}" if self.msg else "")


class ManifestMalformedError(DebTrustError):
    @override
    def __str__(self) -> str:
        return "malformed release file" + (f": {self.msg}" if self.msg else "")


class IndexMalformedError(DebTrustError):
    @override
    def __str__(self) -> str:
        return "malformed package index" + (f": {self.msg}" if self.msg else "")


class DigestMissingError(DebTrustError):
    path: str

    def __init__(self, path: str) -> None:
        super().__init__(f"missing sha256sum for '{path}'")
        self.path = path

    @override
    def __str__(self) -> str:
        return f"missing expected digest for '{self.path}'"


class ChainLink(enum.StrEnum):
    INDEX = "index"
    ARTIFACT = "artifact"


class DigestMismatchError(DebTrustError):
    """Downloaded bytes don't hash to the digest the trust chain vouches for."""

    link: ChainLink
    what: str
    expected: str
    observed: str

    def __init__(
        self, *, link: ChainLink, what: str, expected: str, observed: str
    ) -> None:
        super().__init__()
        self.link = link
        self.what = what
        self.expected = expected
        self.observed = observed

    @override
    def __str__(self) -> str:
        return (
            f"{self.link} digest mismatch for '{self.what}' "
            + f"(signed: {self.expected}, downloaded: {self.observed})"
        )


class IndexDigestMismatchError(DigestMismatchError):
    def __init__(self, *, what: str, expected: str, observed: str) -> None:
        super().__init__(
            link=ChainLink.INDEX, what=what, expected=expected, observed=observed
        )


class ArtifactDigestMismatchError(DigestMismatchError):
    def __init__(self, *, what: str, expected: str, observed: str) -> None:
        super().__init__(
            link=ChainLink.ARTIFACT, what=what, expected=expected, observed=observed
        )


class PackageNotFoundError(DebTrustError):
    name: str

    def __init__(self, name: str) -> None:
        super().__init__(f"repository didn't contain '{name}'")
        self.name = name

    @override
    def __str__(self) -> str:
        return f"package not found in repository: {self.name}"
