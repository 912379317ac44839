# debtrust - pgp signature verification
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

import shutil
import tempfile
from collections.abc import Awaitable, Callable, Generator
from contextlib import contextmanager
from pathlib import Path

from debtrust.errors import CommandError, SignatureInvalidError, TemporaryStorageError
from debtrust.logger import logger as root_logger
from debtrust.utils import async_run_cmd

logger = root_logger.getChild("pgp")


# (signature path, signed file path, keyring path)
SignatureVerifier = Callable[[Path, Path, Path], Awaitable[None]]


@contextmanager
def staged_signature(signed: bytes, sig: bytes) -> Generator[tuple[Path, Path]]:
    """
    Stage a signed file and its detached signature in a private directory.

    Yields the signature's and the signed file's paths. The directory is removed
    on exit, whether or not the body raised.
    """
    try:
        tmp_path = Path(tempfile.mkdtemp(prefix="debtrust-"))
    except OSError as e:
        msg = f"error creating temporary directory: {e}"
        logger.error(msg)
        raise TemporaryStorageError(msg) from e

    try:
        tmp_path.chmod(0o700)
        artifact_path = tmp_path / "artifact"
        _ = artifact_path.write_bytes(signed)
        sig_path = tmp_path / "sig"
        _ = sig_path.write_bytes(sig)
    except OSError as e:
        shutil.rmtree(tmp_path, ignore_errors=True)
        msg = f"error staging files at '{tmp_path}': {e}"
        logger.error(msg)
        raise TemporaryStorageError(msg) from e

    logger.debug(f"staged signed file and signature at '{tmp_path}'")
    try:
        yield sig_path, artifact_path
    finally:
        shutil.rmtree(tmp_path, ignore_errors=True)
        logger.debug(f"removed staging directory '{tmp_path}'")


async def verify_sig(
    sig_path: Path,
    artifact_path: Path,
    keyring_path: Path,
    *,
    gnupghome: Path | None = None,
) -> None:
    """
    Verify a detached signature with 'gpgv', against the keys in `keyring_path`.

    'gpgv' gets its home directory set to `gnupghome`, defaulting to the
    directory holding the signature, so the user's own keyrings never take part
    in the verification.
    """
    if not keyring_path.exists() or not keyring_path.is_file():
        msg = f"keyring '{keyring_path}' does not exist or is not a file"
        logger.error(msg)
        raise SignatureInvalidError(msg)

    home = gnupghome if gnupghome else sig_path.parent
    cmd = [
        "gpgv",
        "--keyring",
        keyring_path.resolve().as_posix(),
        sig_path.resolve().as_posix(),
        artifact_path.resolve().as_posix(),
    ]

    try:
        rc, _, stderr = await async_run_cmd(
            cmd, extra_env={"GNUPGHOME": home.resolve().as_posix()}
        )
    except CommandError as e:
        msg = f"unable to run gpgv: {e}"
        logger.error(msg)
        raise SignatureInvalidError(msg) from e

    if rc != 0:
        msg = f"signature verification failed (rc={rc}): {stderr.strip()}"
        logger.error(msg)
        raise SignatureInvalidError(msg)

    logger.debug(f"gpgv: {stderr.strip()}")
