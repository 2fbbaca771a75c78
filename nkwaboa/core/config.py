from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App settings
    PROJECT_NAME: str = "Nkwa-Boa"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Ledger files (pipe-delimited)
    DATA_DIR: str = Field(default="data")
    EXPENDITURE_FILE: str = "expenditures.txt"
    CATEGORY_FILE: str = "categories.txt"
    BANK_ACCOUNT_FILE: str = "accounts.txt"

    # Reporting
    CURRENCY_SYMBOL: str = "GH₵"
    CURRENCY_CODE: str = "GHS"  # PDF core fonts are latin-1 only

    # AWS S3
    S3_BUCKET_NAME: str = Field(default="nkwaboa-reports")
    S3_REGION: str = Field(default="eu-west-1")


settings = Settings()
