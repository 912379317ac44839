# debtrust - progress reporting
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

import abc
import logging
from typing import override

from debtrust.logger import logger as root_logger
from debtrust.models import PipelineState


class Reporter(abc.ABC):
    """Observe a pipeline run's progress."""

    @abc.abstractmethod
    def progress(self, msg: str) -> None:
        """Report an informational progress message."""
        pass

    @abc.abstractmethod
    def transition(self, state: PipelineState) -> None:
        """Report the pipeline has moved to `state`."""
        pass


class LoggingReporter(Reporter):
    _logger: logging.Logger

    def __init__(self, logger: logging.Logger | None = None) -> None:
        super().__init__()
        self._logger = logger if logger else root_logger.getChild("apt")

    @override
    def progress(self, msg: str) -> None:
        self._logger.info(msg)

    @override
    def transition(self, state: PipelineState) -> None:
        if state == PipelineState.FAILED:
            self._logger.error(f"pipeline state: {state}")
        else:
            self._logger.debug(f"pipeline state: {state}")
