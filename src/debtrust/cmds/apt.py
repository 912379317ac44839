# debtrust - commands - apt
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

import asyncio
import errno
import sys
from pathlib import Path

import click
from rich.padding import Padding
from rich.table import Table

from debtrust.apt import Client
from debtrust.cmds import console, perror, psuccess, with_config
from debtrust.cmds import logger as parent_logger
from debtrust.config import RepoConfig
from debtrust.errors import (
    ConfigError,
    DebTrustError,
    DigestMismatchError,
    PackageNotFoundError,
    SignatureInvalidError,
)
from debtrust.http import Transport
from debtrust.models import PackageRecord

logger = parent_logger.getChild("apt")


def _get_keyring(config: RepoConfig, keyring: Path | None) -> Path:
    path = keyring if keyring else config.keyring
    if not path:
        perror("no keyring specified, use '--keyring' or set 'keyring' in config")
        sys.exit(errno.EINVAL)
    return path


def _exit_code(e: DebTrustError) -> int:
    if isinstance(e, PackageNotFoundError):
        return errno.ENOENT
    if isinstance(e, SignatureInvalidError | DigestMismatchError):
        return errno.EBADMSG
    if isinstance(e, ConfigError):
        return errno.EINVAL
    return errno.ENOTRECOVERABLE


async def _resolve(
    config: RepoConfig, keyring: Path, name: str | None
) -> PackageRecord:
    async with Transport(timeout=config.timeout) as transport:
        client = Client(config, transport)
        return await client.fetch_pkg_release(keyring, name)


async def _download(
    config: RepoConfig, keyring: Path, name: str | None
) -> tuple[PackageRecord, bytes]:
    async with Transport(timeout=config.timeout) as transport:
        client = Client(config, transport)
        pkg = await client.fetch_pkg_release(keyring, name)
        return pkg, await client.download_pkg(pkg)


def _print_record(pkg: PackageRecord) -> None:
    table = Table(show_header=False, show_lines=False, box=None)
    table.add_column(justify="right", style="cyan", no_wrap=True)
    table.add_column(justify="left", style="magenta", no_wrap=True)

    table.add_row("package", pkg.package)
    table.add_row("version", pkg.version)
    table.add_row("filename", pkg.filename)
    table.add_row("sha256", pkg.sha256)
    if pkg.architecture:
        table.add_row("architecture", pkg.architecture)
    if pkg.size is not None:
        table.add_row("size", str(pkg.size))

    console.print(Padding(table, (1, 0, 1, 0)))


_keyring_option = click.option(
    "-k",
    "--keyring",
    type=click.Path(
        exists=True,
        dir_okay=False,
        file_okay=True,
        readable=True,
        resolve_path=True,
        path_type=Path,
    ),
    required=False,
    help="OpenPGP keyring to verify the repository's signature with.",
)

_package_option = click.option(
    "-p",
    "--package",
    "name",
    type=str,
    required=False,
    metavar="NAME",
    help="Package to resolve (default: from config).",
)


@click.command("resolve", help="Resolve a package's verified index entry.")
@_keyring_option
@_package_option
@with_config
def cmd_resolve(config: RepoConfig, keyring: Path | None, name: str | None) -> None:
    keyring_path = _get_keyring(config, keyring)

    try:
        pkg = asyncio.run(_resolve(config, keyring_path, name))
    except DebTrustError as e:
        perror(f"unable to resolve package: {e}")
        sys.exit(_exit_code(e))
    except Exception as e:
        logger.exception(f"unexpected error: {e}")
        perror(f"unable to resolve package: unexpected error: {e}")
        sys.exit(errno.ENOTRECOVERABLE)

    _print_record(pkg)


@click.command("download", help="Download a package, verifying its trust chain.")
@_keyring_option
@_package_option
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, file_okay=True, writable=True, path_type=Path),
    required=False,
    help="Where to write the package to (default: its file name).",
)
@with_config
def cmd_download(
    config: RepoConfig,
    keyring: Path | None,
    name: str | None,
    output_path: Path | None,
) -> None:
    keyring_path = _get_keyring(config, keyring)

    try:
        pkg, deb = asyncio.run(_download(config, keyring_path, name))
    except DebTrustError as e:
        perror(f"unable to download package: {e}")
        sys.exit(_exit_code(e))
    except Exception as e:
        logger.exception(f"unexpected error: {e}")
        perror(f"unable to download package: unexpected error: {e}")
        sys.exit(errno.ENOTRECOVERABLE)

    if not output_path:
        output_path = Path.cwd() / Path(pkg.filename).name

    try:
        _ = output_path.write_bytes(deb)
    except OSError as e:
        perror(f"unable to write package to '{output_path}': {e}")
        sys.exit(errno.EIO)

    _print_record(pkg)
    psuccess(f"wrote verified '{pkg.package}' to '{output_path}'")
