# debtrust - utilities
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
import os
from pathlib import Path

from debtrust.errors import CommandError
from debtrust.logger import logger as root_logger

logger = root_logger.getChild("utils")


async def async_run_cmd(
    cmd: list[str],
    *,
    timeout: float | None = None,
    cwd: Path | None = None,
    extra_env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    logger.debug(f"async run '{cmd}'")

    env: dict[str, str] = os.environ.copy()
    if extra_env:
        env.update(extra_env)

    try:
        p = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            env=env,
        )
    except OSError as e:
        msg = f"error running '{cmd}': {e}"
        logger.error(msg)
        raise CommandError(msg) from e

    try:
        stdout, stderr = await asyncio.wait_for(p.communicate(), timeout=timeout)
    except (TimeoutError, asyncio.CancelledError):
        logger.error(f"async subprocess '{cmd[0]}' timed out or was cancelled")
        p.kill()
        _ = await p.wait()
        raise

    retcode = p.returncode if p.returncode is not None else -1
    return (
        retcode,
        stdout.decode("utf-8", errors="replace"),
        stderr.decode("utf-8", errors="replace"),
    )
