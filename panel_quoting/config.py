from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./panel_quoting.db"
    COMPANY_NAME: str = "Mosquito Curtains"
    COMPANY_EMAIL: str = "sales@mosquitocurtains.com"
    COMPANY_PHONE: str = ""

    # Price table: seeded from DEFAULT_PRICES on first run
    SEED_DEFAULT_PRICES: bool = True

    # Builder limits
    MAX_SIDES: int = 6

    class Config:
        env_file = ".env"


settings = Settings()
