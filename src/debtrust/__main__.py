#!/usr/bin/env python3

# debtrust - resolve and download Debian packages through a signed trust chain
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

import logging
from pathlib import Path

import click
from rich.logging import RichHandler

from debtrust.cmds import Ctx, apt, config, console, pass_ctx
from debtrust.cmds import logger as parent_logger
from debtrust.logger import logger_set_handler, set_debug_logging

logger = parent_logger.getChild("main")


@click.group()
@click.option(
    "-d", "--debug", help="Enable debug output", is_flag=True, envvar="DEBTRUST_DEBUG"
)
@click.option(
    "-c",
    "--config",
    "config_path",
    help="Path to configuration file.",
    type=click.Path(
        exists=True,
        dir_okay=False,
        file_okay=True,
        readable=True,
        resolve_path=True,
        path_type=Path,
    ),
    required=False,
    envvar="DEBTRUST_CONFIG",
)
@pass_ctx
def cmd_main(ctx: Ctx, debug: bool, config_path: Path | None) -> None:
    if debug:
        set_debug_logging()

    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)

    rich_handler = RichHandler(rich_tracebacks=True, console=console)
    logger_set_handler(rich_handler)

    ctx.config_path = config_path


cmd_main.add_command(apt.cmd_resolve)
cmd_main.add_command(apt.cmd_download)
cmd_main.add_command(config.cmd_config)


if __name__ == "__main__":
    cmd_main()
