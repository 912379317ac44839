# debtrust - content hashing
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
import hmac


def sha256sum(data: bytes) -> str:
    """Obtain the lowercase hex SHA256 digest of `data`."""
    return hashlib.sha256(data).hexdigest()


def digests_match(expected: str, observed: str) -> bool:
    """Compare two hex digests, ignoring case."""
    return hmac.compare_digest(
        expected.strip().lower().encode("ascii", errors="replace"),
        observed.strip().lower().encode("ascii", errors="replace"),
    )
