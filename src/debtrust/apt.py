# debtrust - apt repository trust chain
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

"""
Resolve a package from a Debian repository through its chain of trust.

The repository's 'Release' file is the only signed document. It vouches for the
package index's SHA256, and the index in turn vouches for each package's
SHA256. Every link is checked before the next one is fetched, and bytes are
only ever parsed after their check passed.
"""

from collections.abc import Callable, Generator
from contextlib import contextmanager
from pathlib import Path

from debtrust.config import RepoConfig
from debtrust.crypto import digests_match, sha256sum
from debtrust.deb import parse_package_index, parse_release_file
from debtrust.errors import (
    ArtifactDigestMismatchError,
    DebTrustError,
    DecodeError,
    IndexDigestMismatchError,
)
from debtrust.http import Fetcher
from debtrust.logger import logger as root_logger
from debtrust.models import PackageIndex, PackageRecord, PipelineState, ReleaseManifest
from debtrust.pgp import SignatureVerifier, staged_signature, verify_sig
from debtrust.reporter import LoggingReporter, Reporter

logger = root_logger.getChild("apt")


def _decode(data: bytes, what: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"{what} is not valid utf-8: {e}"
        logger.error(msg)
        raise DecodeError(msg) from e


def find_package(index: PackageIndex, name: str) -> PackageRecord:
    """Find the first record named exactly `name` in `index`."""
    return index.find(name)


class Client:
    config: RepoConfig
    state: PipelineState
    _transport: Fetcher
    _verifier: SignatureVerifier
    _hasher: Callable[[bytes], str]
    _reporter: Reporter

    def __init__(
        self,
        config: RepoConfig,
        transport: Fetcher,
        *,
        verifier: SignatureVerifier | None = None,
        hasher: Callable[[bytes], str] | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self.config = config
        self.state = PipelineState.START
        self._transport = transport
        self._verifier = verifier if verifier else verify_sig
        self._hasher = hasher if hasher else sha256sum
        self._reporter = reporter if reporter else LoggingReporter(logger)

    def _set_state(self, state: PipelineState) -> None:
        self.state = state
        self._reporter.transition(state)

    @contextmanager
    def _tracked(self) -> Generator[None]:
        try:
            yield
        except Exception:
            self._set_state(PipelineState.FAILED)
            raise

    async def resolve_manifest(self, keyring: Path) -> tuple[ReleaseManifest, str]:
        """
        Obtain the verified release file, and the package index's digest.

        The release file is only parsed once its detached signature has been
        verified against `keyring`.
        """
        with self._tracked():
            self._reporter.progress("Downloading release file...")
            release = await self._transport.fetch(self.config.release_url)

            self._reporter.progress("Downloading signature...")
            sig = await self._transport.fetch(self.config.release_sig_url)
            self._set_state(PipelineState.MANIFEST_FETCHED)

            self._reporter.progress("Verifying pgp signature...")
            with staged_signature(release, sig) as (sig_path, artifact_path):
                await self._verifier(sig_path, artifact_path, keyring)

            self._reporter.progress("Signature verified successfully!")
            self._set_state(PipelineState.MANIFEST_VERIFIED)

            manifest = parse_release_file(_decode(release, "release file"))
            digest = manifest.digest_for(self.config.index_path)
            return manifest, digest

    async def resolve_index(self, expected_digest: str) -> PackageIndex:
        """Obtain the package index, verified against `expected_digest`."""
        with self._tracked():
            self._reporter.progress("Downloading package index...")
            raw_index = await self._transport.fetch(self.config.index_url)
            self._set_state(PipelineState.INDEX_FETCHED)

            self._reporter.progress("Verifying with sha256sum hash...")
            downloaded = self._hasher(raw_index)
            if not digests_match(expected_digest, downloaded):
                err = IndexDigestMismatchError(
                    what=self.config.index_path,
                    expected=expected_digest,
                    observed=downloaded,
                )
                logger.error(f"{err}")
                raise err
            self._set_state(PipelineState.INDEX_VERIFIED)

            index = parse_package_index(_decode(raw_index, "package index"))
            logger.debug(f"parsed package index: {len(index)} packages")
            return index

    def find_package(self, index: PackageIndex, name: str) -> PackageRecord:
        with self._tracked():
            pkg = find_package(index, name)
            logger.debug(f"found package: {pkg}")
            self._set_state(PipelineState.PACKAGE_FOUND)
            return pkg

    async def fetch_pkg_release(
        self, keyring: Path, name: str | None = None
    ) -> PackageRecord:
        """Resolve the verified package record for `name`, or the configured one."""
        self._set_state(PipelineState.START)
        _, index_digest = await self.resolve_manifest(keyring)
        index = await self.resolve_index(index_digest)
        return self.find_package(index, name if name else self.config.package)

    async def download_pkg(self, pkg: PackageRecord) -> bytes:
        """
        Download the package `pkg` points to, verified against its digest.

        The returned bytes are not stored anywhere; that's up to the caller.
        """
        with self._tracked():
            self._reporter.progress(
                f"Downloading deb file for '{pkg.display_name}' "
                + f"package={pkg.package} version={pkg.version}"
            )
            deb = await self._transport.fetch(self.config.artifact_url(pkg.filename))
            self._set_state(PipelineState.ARTIFACT_FETCHED)

            self._reporter.progress("Verifying with sha256sum hash...")
            downloaded = self._hasher(deb)
            if not digests_match(pkg.sha256, downloaded):
                err = ArtifactDigestMismatchError(
                    what=pkg.filename,
                    expected=pkg.sha256,
                    observed=downloaded,
                )
                logger.error(f"{err}")
                raise err

            self._set_state(PipelineState.ARTIFACT_VERIFIED)
            return deb

    async def run(self, keyring: Path, name: str | None = None) -> bytes:
        """Resolve and download a package, verifying the whole trust chain."""
        pkg = await self.fetch_pkg_release(keyring, name)
        return await self.download_pkg(pkg)
