from typing import Literal, Optional

from .base import DBBase


class Hive(DBBase):
    """HiveServer2 connection params for the warehouse side."""

    type: Literal["hive"]
    database: str = "default"
    auth: Optional[str] = None

    def connect(self):
        try:
            from pyhive import hive
        except ImportError as err:
            raise ImportError(
                "PyHive is required for the warehouse side. "
                "Install it with: pip install 'twinsql[hive]'"
            ) from err
        options = {}
        if self.auth:
            options["auth"] = self.auth
            options["password"] = self.get_password()
        return hive.connect(
            host=self.host,
            port=self.port,
            username=self.username,
            database=self.database,
            **options,
        )
