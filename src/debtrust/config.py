# debtrust - config
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

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, ClassVar

import pydantic
import yaml

from debtrust.errors import ConfigError
from debtrust.logger import logger as root_logger

logger = root_logger.getChild("config")


class RepoConfig(pydantic.BaseModel):
    """
    Describe the repository to resolve packages from.

    Defaults point at the Spotify client's Debian repository.
    """

    model_config: ClassVar[pydantic.ConfigDict] = pydantic.ConfigDict(
        validate_by_alias=True,
        validate_by_name=True,
        serialize_by_alias=True,
    )

    base_url: Annotated[
        str, pydantic.Field(alias="base-url", default="http://repository.spotify.com")
    ]
    suite: str = "testing"
    component: str = "non-free"
    arch: str = "amd64"
    package: str = "spotify-client"
    keyring: Path | None = None
    timeout: Annotated[float, pydantic.Field(gt=0)] = 30.0

    @pydantic.field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, v: str) -> str:
        v = v.rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base url must be http(s), got '{v}'")
        return v

    @property
    def dists_url(self) -> str:
        return f"{self.base_url}/dists/{self.suite}"

    @property
    def release_url(self) -> str:
        return f"{self.dists_url}/Release"

    @property
    def release_sig_url(self) -> str:
        return f"{self.dists_url}/Release.gpg"

    @property
    def index_path(self) -> str:
        """Path of the package index, relative to the suite, as in 'Release'."""
        return f"{self.component}/binary-{self.arch}/Packages"

    @property
    def index_url(self) -> str:
        return f"{self.dists_url}/{self.index_path}"

    def artifact_url(self, filename: str) -> str:
        return f"{self.base_url}/{filename.lstrip('/')}"

    @classmethod
    def load(cls, path: Path) -> RepoConfig:
        if not path.exists() or not path.is_file():
            raise ConfigError(f"config file '{path}' does not exist or is not a file")

        try:
            raw_data = path.read_text()
            if path.suffix.lower() in (".yaml", ".yml"):
                config = RepoConfig.model_validate(yaml.safe_load(raw_data) or {})
            else:
                config = RepoConfig.model_validate_json(raw_data)

        except (yaml.YAMLError, pydantic.ValidationError) as e:
            msg = f"error loading config at '{path}': {e}"
            logger.error(msg)
            raise ConfigError(msg) from e
        except Exception as e:
            msg = f"unexpected error loading config at '{path}': {e}"
            logger.error(msg)
            raise ConfigError(msg) from e

        return config

    def store(self, path: Path) -> None:
        """Store config to specified path in YAML format."""
        try:
            # Path objects need pydantic's JSON serializer before yaml sees them.
            json_dict = json.loads(self.model_dump_json())  # pyright: ignore[reportAny]
            raw_data = yaml.safe_dump(json_dict, indent=2)
            _ = path.write_text(raw_data)
        except Exception as e:
            msg = f"error storing config to '{path}': {e}"
            logger.error(msg)
            raise ConfigError(msg) from e
