from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "CI TestGrid"
    APP_VERSION: str = "1.0.0"
    ENV: str = "dev"  # Environment: "dev", "staging", "prod"

    # --- Log decoding ---
    LOG_FILE_ENCODING: str = "utf-8"
    LOG_FILE_DECODE_ERRORS: str = "replace"  # "strict" turns bad bytes into read errors

    # --- Summaries ---
    SUMMARY_MAX_FAILED_TESTS: int = 5  # Failed test names listed per summary
    SUMMARY_MAX_LOG_LINES: int = 20  # Trailing log lines kept per failure excerpt

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
