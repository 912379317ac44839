# debtrust - commands
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
from collections.abc import Callable
from functools import update_wrapper
from pathlib import Path
from typing import Concatenate, ParamSpec, TypeVar

import click
from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.theme import Theme

from debtrust.config import RepoConfig
from debtrust.errors import ConfigError
from debtrust.logger import logger as root_logger

logger = root_logger.getChild("cmds")


class Ctx:
    config_path: Path | None

    def __init__(self) -> None:
        self.config_path = None


pass_ctx = click.make_pass_decorator(Ctx, ensure=True)


_R = TypeVar("_R")
_P = ParamSpec("_P")


def with_config(f: Callable[Concatenate[RepoConfig, _P], _R]) -> Callable[_P, _R]:
    """Pass the repository config to the function, defaults if none was given."""

    def inner(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        curr_ctx = click.get_current_context()
        ctx = curr_ctx.find_object(Ctx)
        if not ctx:
            perror(f"missing context for '{f.__name__}'")
            sys.exit(errno.ENOTRECOVERABLE)

        config = RepoConfig()
        if ctx.config_path:
            try:
                config = RepoConfig.load(ctx.config_path)
            except ConfigError as e:
                perror(f"unable to read configuration file: {e}")
                sys.exit(errno.EINVAL)

        return f(config, *args, **kwargs)

    return update_wrapper(inner, f)


class _DebTrustHighlighter(RegexHighlighter):
    base_style: str = "debtrust."
    highlights: list[str] = [  # noqa: RUF012
        r"(?P<sha>[a-f0-9]{64})",
    ]


_theme = Theme(
    {
        "debtrust.sha": "purple",
    }
)
console = Console(highlighter=_DebTrustHighlighter(), theme=_theme)


def perror(s: str) -> None:
    console.print(
        f"[bold][red]error:[/red] {s}[/bold]",
    )


def psuccess(s: str) -> None:
    console.print(s, style="bold green")
