# debtrust - debian repository metadata parsing
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

import re

import pydantic

from debtrust.errors import (
    DebTrustError,
    IndexMalformedError,
    ManifestMalformedError,
)
from debtrust.logger import logger as root_logger
from debtrust.models import PackageIndex, PackageRecord, ReleaseManifest

logger = root_logger.getChild("deb")


_sha256_re = re.compile(r"[0-9a-fA-F]{64}")
_size_re = re.compile(r"[0-9]+")

Stanza = dict[str, list[str]]


def _parse_stanzas(text: str, err: type[DebTrustError]) -> list[Stanza]:
    """
    Split deb822 formatted text into stanzas.

    Each stanza maps a field name, as written, to its lines. The first entry is
    the value on the field's own line, possibly empty, followed by any
    continuation lines.
    """
    stanzas: list[Stanza] = []
    current: Stanza = {}
    last_key: str | None = None

    # deb822 lines end in LF only; other unicode line breaks are field content
    for lineno, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.rstrip("\r")
        if not line.strip():
            if current:
                stanzas.append(current)
            current = {}
            last_key = None
            continue

        if line[0] in " \t":
            if last_key is None:
                msg = f"line {lineno}: continuation line outside of a field"
                logger.error(msg)
                raise err(msg)
            current[last_key].append(line.strip())
            continue

        key, sep, value = line.partition(":")
        if not sep or not key or re.search(r"\s", key):
            msg = f"line {lineno}: expected 'Field: value', got '{line}'"
            logger.error(msg)
            raise err(msg)

        if key.lower() in (k.lower() for k in current):
            msg = f"line {lineno}: duplicate field '{key}'"
            logger.error(msg)
            raise err(msg)

        current[key] = [value.strip()]
        last_key = key

    if current:
        stanzas.append(current)

    return stanzas


def _get_field(stanza: Stanza, name: str) -> list[str] | None:
    name = name.lower()
    for key, lines in stanza.items():
        if key.lower() == name:
            return lines
    return None


def _parse_sha256_entries(lines: list[str]) -> dict[str, str]:
    digests: dict[str, str] = {}
    for entry in lines:
        if not entry:
            continue

        parts = entry.split()
        if len(parts) != 3:
            msg = f"malformed SHA256 entry '{entry}'"
            logger.error(msg)
            raise ManifestMalformedError(msg)

        digest, size, path = parts
        if not _sha256_re.fullmatch(digest) or not _size_re.fullmatch(size):
            msg = f"malformed SHA256 entry '{entry}'"
            logger.error(msg)
            raise ManifestMalformedError(msg)

        if path in digests:
            msg = f"duplicate SHA256 entry for '{path}'"
            logger.error(msg)
            raise ManifestMalformedError(msg)

        digests[path] = digest.lower()

    return digests


def parse_release_file(text: str) -> ReleaseManifest:
    """
    Parse a repository's 'Release' file.

    Only the 'SHA256' section is used for the trust chain; other single-line
    fields are kept as informational metadata. Duplicate paths are rejected.
    """
    stanzas = _parse_stanzas(text, ManifestMalformedError)
    if len(stanzas) != 1:
        msg = f"expected a single paragraph, found {len(stanzas)}"
        logger.error(msg)
        raise ManifestMalformedError(msg)

    stanza = stanzas[0]
    sha256_lines = _get_field(stanza, "SHA256")
    if sha256_lines is None:
        msg = "missing 'SHA256' field"
        logger.error(msg)
        raise ManifestMalformedError(msg)

    digests = _parse_sha256_entries(sha256_lines)
    fields = {k: v[0] for k, v in stanza.items() if len(v) == 1 and v[0]}

    logger.debug(f"parsed release file with {len(digests)} sha256sums")
    return ReleaseManifest(digests=digests, fields=fields)


def _parse_package_record(stanza: Stanza) -> PackageRecord:
    values: dict[str, str] = {}
    for field in ("Package", "Version", "Filename", "SHA256"):
        lines = _get_field(stanza, field)
        if not lines or not lines[0]:
            msg = f"package entry missing '{field}' field: {list(stanza.keys())}"
            logger.error(msg)
            raise IndexMalformedError(msg)
        values[field.lower()] = lines[0]

    if not _sha256_re.fullmatch(values["sha256"]):
        msg = f"package '{values['package']}' has malformed SHA256"
        logger.error(msg)
        raise IndexMalformedError(msg)

    arch = _get_field(stanza, "Architecture")
    size = _get_field(stanza, "Size")
    if size is not None and not _size_re.fullmatch(size[0]):
        msg = f"package '{values['package']}' has malformed size '{size[0]}'"
        logger.error(msg)
        raise IndexMalformedError(msg)

    try:
        return PackageRecord(
            package=values["package"],
            version=values["version"],
            filename=values["filename"],
            sha256=values["sha256"].lower(),
            architecture=arch[0] if arch else None,
            size=int(size[0]) if size else None,
        )
    except pydantic.ValidationError as e:
        msg = f"invalid package entry '{values['package']}': {e}"
        logger.error(msg)
        raise IndexMalformedError(msg) from e


def parse_package_index(text: str) -> PackageIndex:
    """Parse a 'Packages' index into its package records, in index order."""
    stanzas = _parse_stanzas(text, IndexMalformedError)
    records = [_parse_package_record(s) for s in stanzas]
    logger.debug(f"parsed package index with {len(records)} entries")
    return PackageIndex(records=records)
