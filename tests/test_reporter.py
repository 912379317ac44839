# debtrust - tests - reporter
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

import pytest

from debtrust.models import PipelineState
from debtrust.reporter import LoggingReporter


def test_logging_reporter(caplog: pytest.LogCaptureFixture) -> None:
    reporter = LoggingReporter(logging.getLogger("debtrust-test-reporter"))

    with caplog.at_level(logging.DEBUG, logger="debtrust-test-reporter"):
        reporter.progress("Downloading release file...")
        reporter.transition(PipelineState.MANIFEST_FETCHED)
        reporter.transition(PipelineState.FAILED)

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.INFO, "Downloading release file..."),
        (logging.DEBUG, "pipeline state: manifest-fetched"),
        (logging.ERROR, "pipeline state: failed"),
    ]
