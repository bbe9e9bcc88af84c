from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./bookkeeper.db"
    log_level: str = "INFO"
    invoice_number_prefix: str = "INV"
    estimate_line_tax_inclusive: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_prefix="")


settings = Settings()
