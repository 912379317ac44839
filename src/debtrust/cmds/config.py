# debtrust - commands - config
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

import errno
import sys
from pathlib import Path

import click

from debtrust.cmds import perror, psuccess
from debtrust.config import RepoConfig
from debtrust.errors import ConfigError


@click.group("config", help="Configuration related operations.")
def cmd_config() -> None:
    pass


@cmd_config.command("init", help="Write a default configuration file.")
@click.argument(
    "config_path",
    metavar="PATH",
    type=click.Path(dir_okay=False, file_okay=True, path_type=Path),
    required=False,
    default="debtrust.config.yaml",
)
@click.option(
    "-k",
    "--keyring",
    type=click.Path(dir_okay=False, file_okay=True, resolve_path=True, path_type=Path),
    required=False,
    help="OpenPGP keyring to verify the repository's signature with.",
)
@click.option("--force", is_flag=True, default=False, help="Overwrite existing file.")
def cmd_config_init(config_path: Path, keyring: Path | None, force: bool) -> None:
    if config_path.exists() and not force:
        perror(f"config file '{config_path}' already exists, use '--force'")
        sys.exit(errno.EEXIST)

    config = RepoConfig(keyring=keyring)
    try:
        config.store(config_path)
    except ConfigError as e:
        perror(f"unable to write config: {e}")
        sys.exit(errno.ENOTRECOVERABLE)

    psuccess(f"wrote config to '{config_path}'")
