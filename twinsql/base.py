import logging
import os
from typing import Literal, Optional

from pydantic import BaseModel
from sqlalchemy.engine.url import URL, make_url

LOGGER = logging.getLogger(__name__)


class DBBase(BaseModel):
    """DBBase with common connection attributes."""

    host: str
    port: int
    username: str
    password: Optional[str] = None

    def get_password(self) -> Optional[str]:
        """password holds the name of the environment variable to read."""
        if self.password is None:
            return None
        value = os.getenv(self.password)
        if value is None:
            LOGGER.warning("environment variable %s is not set", self.password)
        return value

    def url(self) -> URL:
        """
        see in herited classe for details
        """
        raise NotImplementedError


class UrlSource(BaseModel):
    """Any SQLAlchemy URL, sqlite files included."""

    type: Literal["url"]
    dsn: str

    def url(self) -> URL:
        return make_url(self.dsn)
