"""Configuration for tablecfg"""
import os
from collections.abc import Mapping

from dotenv import load_dotenv

load_dotenv()

PREFIX = "TABLECFG_DYNAMODB_"


class Config:
    """Environment-backed settings.

    Every client and table setting lives under ``TABLECFG_DYNAMODB_``.
    Pass ``environ`` to read from a mapping other than ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None):
        env = os.environ if environ is None else environ
        self._env = env

        self.DEBUG = env.get("TABLECFG_DEBUG", "false").lower() == "true"

        # Client
        self.LOCAL_ADDRESS = self.setting("LOCAL_ADDRESS")
        self.CREDENTIAL_ACCESS_KEY = self.setting("CREDENTIAL_ACCESS_KEY")
        self.CREDENTIAL_SECRET_KEY = self.setting("CREDENTIAL_SECRET_KEY")
        self.ENDPOINT = self.setting("ENDPOINT")
        self.REGION = self.setting("REGION")
        self.REGION_OVERRIDE = self.setting("REGION_OVERRIDE")

        # Table
        self.TABLE_NAME = self.setting("TABLE_NAME", "DynamoDbCasProperties")
        # Numeric values stay strings; load_table_spec validates them.
        self.READ_CAPACITY = self.setting("READ_CAPACITY", "10")
        self.WRITE_CAPACITY = self.setting("WRITE_CAPACITY", "10")
        self.WAIT_TIMEOUT = self.setting("WAIT_TIMEOUT", "600")
        self.POLL_INTERVAL = self.setting("POLL_INTERVAL", "20")
        self.RECREATE_TABLE = self.setting("RECREATE_TABLE", "false").lower() == "true"

    def setting(self, key: str, default: str = "") -> str:
        """Read ``TABLECFG_DYNAMODB_<key>``, stripped; blank means default."""
        value = (self._env.get(PREFIX + key) or "").strip()
        return value or default


config = Config()
