# debtrust - tests - helpers
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

import hashlib
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType

from debtrust.errors import SignatureInvalidError, TransportError

BASE_URL = "http://repo.example.org"

DEB = b"!<arch>\ndebian-binary   1688000000  0     0     100644  4         `\n2.0\n"

DEB_FILENAME = (
    "pool/non-free/s/spotify-client/"
    + "spotify-client_1.2.11.916.geb595a67_amd64.deb"
)


def sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def make_packages(deb: bytes = DEB) -> str:
    return f"""Package: spotify-client-gnome-support
Architecture: all
Version: 0.1.0
Filename: pool/non-free/s/spotify-client-gnome-support/gnome-support_0.1.0_all.deb
Size: 3
SHA256: {sha256(b"abc")}

Package: spotify-client
Architecture: amd64
Version: 1:1.2.11.916.geb595a67
Filename: {DEB_FILENAME}
Size: {len(deb)}
SHA256: {sha256(deb)}
Description: Spotify streaming music client
 Listen to music.
 .
 Now with a second paragraph.
"""


def make_release(entries: dict[str, bytes]) -> str:
    lines = [
        "Origin: Example LTD",
        "Label: Example Public Repository",
        "Suite: testing",
        "Codename: testing",
        "Architectures: amd64 i386",
        "Components: non-free",
        "SHA256:",
    ]
    lines.extend(f" {sha256(data)} {len(data)} {path}" for path, data in entries.items())
    return "\n".join(lines) + "\n"


@dataclass
class FakeTransport:
    contents: dict[str, bytes]
    fetched: list[str] = field(default_factory=list)

    async def __aenter__(self) -> "FakeTransport":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        pass

    async def fetch(self, url: str) -> bytes:
        self.fetched.append(url)
        if url not in self.contents:
            raise TransportError(f"404 for '{url}'")
        return self.contents[url]


@dataclass
class FakeVerifier:
    """Stand-in for 'gpgv', checking the staged files while they exist."""

    valid: bool = True
    calls: list[tuple[Path, Path, Path]] = field(default_factory=list)
    staged: list[tuple[bytes, bytes]] = field(default_factory=list)

    async def __call__(self, sig: Path, artifact: Path, keyring: Path) -> None:
        self.calls.append((sig, artifact, keyring))
        self.staged.append((sig.read_bytes(), artifact.read_bytes()))
        if not self.valid:
            raise SignatureInvalidError("BAD signature")
