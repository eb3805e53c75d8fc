from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


SUBSCRIPTIONS_DEFAULT_TABLENAME = "subscriptions"
CONFIRMATIONS_DEFAULT_TABLENAME = "confirmations"

BILLING_MODES = ("PAY_PER_REQUEST", "PROVISIONED")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Runtime
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # AWS / data
    aws_region: str = Field(default="us-east-1", validation_alias="AWS_REGION")
    # e.g. "region=us-east-1 credentials=env:" (see db.dynamodb.session)
    mailinglist_dsn: str | None = Field(default=None, validation_alias="MAILINGLIST_DSN")
    subscriptions_table_name: str = Field(
        default=SUBSCRIPTIONS_DEFAULT_TABLENAME, validation_alias="SUBSCRIPTIONS_TABLE_NAME"
    )
    confirmations_table_name: str = Field(
        default=CONFIRMATIONS_DEFAULT_TABLENAME, validation_alias="CONFIRMATIONS_TABLE_NAME"
    )
    ddb_billing_mode: str = Field(default="PAY_PER_REQUEST", validation_alias="DDB_BILLING_MODE")

    # Confirmation codes older than this are treated as expired.
    confirmation_ttl_seconds: int = Field(
        default=60 * 60 * 24, validation_alias="CONFIRMATION_TTL_SECONDS"
    )

    def default_dsn(self) -> str:
        """
        DSN used when none is configured explicitly: the default credential
        chain in the configured region.
        """
        dsn = str(self.mailinglist_dsn or "").strip()
        if dsn:
            return dsn
        return f"region={self.aws_region} credentials=iam:"

    def normalized_billing_mode(self) -> str:
        mode = str(self.ddb_billing_mode or "").strip().upper()
        if mode not in BILLING_MODES:
            raise ValueError(f"Invalid DDB_BILLING_MODE: {self.ddb_billing_mode!r}")
        return mode


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# Module-level singleton.
settings = get_settings()
