from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///./news_pulse.db"
    log_level: str = "INFO"

    # Key-value tree backend: "sql" keeps the tree in database_url,
    # "firebase" uses a Realtime Database through firebase-admin.
    store_backend: str = "sql"
    store_root: str = "NewsSentimentAnalysis"
    firebase_database_url: str = ""
    firebase_credentials_path: str = ""  # Service-account JSON; empty uses ADC
    store_timeout_seconds: float = 10.0

    # How long the "thank you" banner stays up after a submission
    feedback_confirmation_seconds: float = 3.0

    # Auth settings
    session_secret_key: str = ""  # Required in production
    session_cookie_name: str = "news_pulse_session"
    session_max_age: int = 86400 * 7  # 7 days
    session_cookie_secure: bool = False  # True in production

    class Config:
        env_file = ".env"


settings = Settings()
