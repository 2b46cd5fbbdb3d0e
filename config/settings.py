# config/settings.py
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Project settings.
    Values are read from environment variables or a .env file; list values
    accept JSON, e.g. TERMINAL_STATUSES='["Retired", "Deceased"]'.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Personnel Records API"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1/personnel"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"

    # Closed vocabularies (loaded once at start, never mutated)
    STATUS_OPTIONS: List[str] = [
        "In-Service",
        "Retired",
        "Resigned",
        "Deceased",
        "Terminated",
        "Suspended",
        "OSD",
        "Deputation",
        "Absent",
        "Remove",
    ]
    IN_SERVICE_STATUSES: List[str] = ["In-Service", "Active"]
    TERMINAL_STATUSES: List[str] = ["Retired", "Deceased"]
    REJOINABLE_STATUSES: List[str] = [
        "Resigned",
        "Terminated",
        "OSD",
        "Suspended",
        "Deputation",
        "Absent",
        "Remove",
    ]
    LEAVE_TYPES: List[str] = [
        "Casual Leave",
        "Earned Leave",
        "Medical Leave",
        "Maternity Leave",
        "Paternity Leave",
        "Ex-Pakistan Leave",
        "Study Leave",
        "Hajj Leave",
        "Itaqaf Leave",
        "Special Casual Leave",
    ]
    MAX_BPS_GRADE: int = 22

settings = Settings()
