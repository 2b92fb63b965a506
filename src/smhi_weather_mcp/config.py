from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="SMHI_", extra="ignore")
    forecast_base_url: str = "https://opendata-download-metfcst.smhi.se/api/category"
    observations_base_url: str = "https://opendata-download-metobs.smhi.se/api"
    log_level: str = "INFO"
    log_dir: str = "logs"


config = Config()
