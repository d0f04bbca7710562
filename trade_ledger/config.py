from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///./trade_ledger.db"
    log_level: str = "INFO"
    allocator_max_retries: int = 5
    invoice_start_number: int = 1
    quote_start_number: int = 1001
    job_start_number: int = 1
    default_due_days: int = 30
    default_quote_expiry_days: int = 30
    vat_after_discount: bool = True
    anonymized_by: str = "admin"
    voided_by: str = "admin"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="")


settings = Settings()
