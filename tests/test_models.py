# debtrust - tests - models
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

import pydantic
import pytest

from debtrust.errors import DigestMissingError, PackageNotFoundError
from debtrust.models import PackageIndex, PackageRecord, ReleaseManifest


def _record(
    name: str, version: str = "1.0", filename: str | None = None
) -> PackageRecord:
    return PackageRecord(
        package=name,
        version=version,
        filename=filename if filename else f"pool/main/{name}_{version}_all.deb",
        sha256="a" * 64,
    )


def test_find_exact_match() -> None:
    index = PackageIndex(records=[_record("foo"), _record("foo-bar"), _record("bar")])
    assert index.find("foo-bar").package == "foo-bar"
    assert index.find("foo").package == "foo"


def test_find_first_of_duplicates() -> None:
    index = PackageIndex(records=[_record("foo", "1.0"), _record("foo", "2.0")])
    assert index.find("foo").version == "1.0"


@pytest.mark.parametrize("name", ["Foo", "fo", "foo ", ""])
def test_find_is_exact_and_case_sensitive(name: str) -> None:
    index = PackageIndex(records=[_record("foo")])
    with pytest.raises(PackageNotFoundError):
        _ = index.find(name)


def test_find_in_empty_index() -> None:
    with pytest.raises(PackageNotFoundError) as excinfo:
        _ = PackageIndex(records=[]).find("foo")
    assert "foo" in str(excinfo.value)


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("pool/non-free/s/spotify-client/spotify.deb", "spotify.deb"),
        ("/spotify.deb", "spotify.deb"),
        ("spotify.deb", "???"),
    ],
)
def test_display_name(filename: str, expected: str) -> None:
    assert _record("foo", filename=filename).display_name == expected


def test_digest_for() -> None:
    manifest = ReleaseManifest(digests={"main/binary-amd64/Packages": "a" * 64})
    assert manifest.digest_for("main/binary-amd64/Packages") == "a" * 64

    with pytest.raises(DigestMissingError) as excinfo:
        _ = manifest.digest_for("main/binary-i386/Packages")
    assert excinfo.value.path == "main/binary-i386/Packages"


def test_records_are_immutable() -> None:
    record = _record("foo")
    with pytest.raises(pydantic.ValidationError):
        record.sha256 = "b" * 64  # pyright: ignore[reportAttributeAccessIssue]
