import logging
from typing import Literal, Optional

from sqlalchemy.engine.url import URL

from .base import DBBase

LOGGER = logging.getLogger(__name__)


class Oracle(DBBase):
    """Oracle connection params."""

    type: Literal["oracle"]
    service_name: str
    init_oracle_client: Optional[str] = None

    def init_client(self):
        """Load the Oracle instant client when a directory is configured."""
        if not self.init_oracle_client:
            return
        import cx_Oracle

        try:
            cx_Oracle.init_oracle_client(lib_dir=self.init_oracle_client)
        except cx_Oracle.ProgrammingError as err:
            # already initialized in this process
            LOGGER.debug("init_oracle_client: %s", err)

    def url(self) -> URL:
        self.init_client()
        return URL.create(
            drivername="oracle+cx_oracle",
            username=self.username,
            password=self.get_password(),
            host=self.host,
            port=self.port,
            query={"service_name": self.service_name},
        )
