from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "", "case_sensitive": False}

    # App
    environment: str = "development"
    debug: bool = True
    app_name: str = "WattPlan"

    # Logging
    log_json: bool = False

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Expert settings used when a request does not carry its own
    default_co2_preset: str = "default"


settings = Settings()
