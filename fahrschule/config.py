from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # SMTP relay
    EMAIL_HOST: str = ""
    EMAIL_PORT: int = 587
    EMAIL_USER: str = ""
    EMAIL_PASS: str = ""
    EMAIL_TIMEOUT: float = 30.0

    # Recipients
    OPERATOR_EMAIL: str = "info@pflanzen-verstehen.de"
    NOTIFICATION_EMAIL: str = "neue-anmeldung@deine-fahrschul-website.de"
    SENDER_NAME: str = "Anmeldeformular Fahrschule [Hier Fahrschulname]"

    # App
    APP_ENV: str = "development"
    CORS_ORIGINS: str = "http://localhost:5173"


settings = Settings()
