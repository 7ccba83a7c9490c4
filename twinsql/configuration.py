import json
import logging
from typing import Annotated, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from .base import UrlSource
from .comparator import FailurePolicy
from .errors import ConfigurationError
from .hive import Hive
from .oracle import Oracle
from .outcome import Mode
from .postgres import Postgres

LOGGER = logging.getLogger()
FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
ch = logging.StreamHandler()
ch.setFormatter(logging.Formatter(FORMAT))

Db = Annotated[Union[Postgres, Oracle, UrlSource], Field(discriminator="type")]


class Settings(BaseModel):
    """Compare settings."""

    source: Db
    target: Optional[Db] = None
    warehouse: Optional[Hive] = None
    statements: str
    mode: Mode = Mode.ORDERED
    failure_policy: FailurePolicy = FailurePolicy.LENIENT
    timeout: Optional[float] = None
    max_rows: Optional[int] = None
    loglevel: str = "INFO"


class Configuration:

    def __init__(self, loglevel="INFO"):
        self.loglevel = loglevel
        if ch not in LOGGER.handlers:
            LOGGER.addHandler(ch)
        LOGGER.setLevel(getattr(logging, loglevel))

    def json_config(self, config_file_name: str) -> str:
        try:
            with open(config_file_name, "r") as fd:
                raw_yaml = yaml.safe_load(fd)
        except IOError as exc:
            raise ConfigurationError(f"{config_file_name} not found.") from exc
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"{config_file_name} yaml not well formed.") from exc
        if raw_yaml is None:
            raise ConfigurationError(f"{config_file_name} is empty.")
        if not isinstance(raw_yaml, dict):
            raise ConfigurationError(f"{config_file_name} is not a mapping.")

        return json.dumps(raw_yaml)

    def settings(self, config_file_name: str) -> Settings:
        raw = self.json_config(config_file_name)
        try:
            settings = Settings.model_validate_json(raw)
        except ValidationError as exc:
            raise ConfigurationError(f"{config_file_name} is invalid: {exc}") from exc
        if settings.target is None and settings.warehouse is None:
            raise ConfigurationError(f"{config_file_name} needs a target or a warehouse.")
        return settings
