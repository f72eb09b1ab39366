from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.platform.constant.path import BASE_DIR, DATA_DIR as DEFAULT_DATA_DIR


_ENV_PATH = BASE_DIR / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (BASE_DIR / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Cinema Booking System'
    VERSION: str = '0.1.0'
    DEBUG: bool = False
    LOG_TO_FILE: bool = False  # Rotating file sink under LOG_DIR

    # Snapshot storage
    DATA_DIR: Path = DEFAULT_DATA_DIR
    BOOKINGS_FILE: str = 'bookings.json'
    INVENTORY_FILE: str = 'inventory.json'

    # Seat grid per (movie, showtime)
    SEAT_ROWS: int = 5
    SEAT_COLS: int = 8

    # Reservation rules
    MAX_TICKETS_PER_RESERVATION: int = 5
    PAYMENT_WINDOW_MINUTES: int = 15
    RESERVATION_CODE_PREFIX: str = 'R-'
    RESERVATION_CODE_LENGTH: int = 6

    # Default concession catalog
    DEFAULT_STOCK: int = 100
    DEFAULT_REORDER_LEVEL: int = 20

    @field_validator('SEAT_ROWS', mode='after')
    @classmethod
    def validate_seat_rows(cls, v: int) -> int:
        # Row labels are single letters A-Z
        if not 1 <= v <= 26:
            raise ValueError('SEAT_ROWS must be between 1 and 26')
        return v

    @field_validator('SEAT_COLS', 'MAX_TICKETS_PER_RESERVATION', 'PAYMENT_WINDOW_MINUTES')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError('must be a positive integer')
        return v

    @property
    def BOOKINGS_PATH(self) -> Path:
        return self.DATA_DIR / self.BOOKINGS_FILE

    @property
    def INVENTORY_PATH(self) -> Path:
        return self.DATA_DIR / self.INVENTORY_FILE


settings = Settings()  # type: ignore
