from typing import Literal, Optional

from sqlalchemy.engine.url import URL

from .base import DBBase


class Postgres(DBBase):
    """Postgres connection params."""

    type: Literal["postgres"]
    dbname: str
    sslmode: Optional[str] = None

    def url(self) -> URL:
        query = {"sslmode": self.sslmode} if self.sslmode else {}
        return URL.create(
            drivername="postgresql+psycopg2",
            username=self.username,
            password=self.get_password(),
            host=self.host,
            port=self.port,
            database=self.dbname,
            query=query,
        )
