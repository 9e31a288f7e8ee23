import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="RENTLEDGER_", extra="ignore")

    db_url: str = "sqlite:///rentledger.db"

    log_level: str = "INFO"
    log_json: bool = False

    history_months: int = 6

    electricity_supplier_category: str = "Electricity"
    water_supplier_category: str = "Water"

    # Used until a tariff row is saved
    default_electricity_rate: int = 3500
    default_water_rate: int = 15000
    default_internet_fee: int = 0
    default_trash_fee: int = 0


settings = Settings()
