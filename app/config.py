# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    secret_key: str
    app_env: str = "development"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    allowed_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    # Pickup confirmation
    otp_length: int = 6
    otp_ttl_minutes: int = 10
    otp_max_attempts: int = 5  # 0 disables the limit
    require_completion_proof: bool = True

    sendgrid_api_key: str = ""
    mail_sender_email: str = "no-reply@example.com"
    mail_sender_name: str = "FoodShare Team"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create an instance of Settings to be imported across the application
settings = Settings()
