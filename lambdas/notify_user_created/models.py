# lambdas/notify_user_created/models.py
"""
Settings and plain-dataclass models for the user creation notifier.
"""
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# EventBridge pattern the deployed rule uses to route CreateUser calls here.
# The handler itself does not filter on it.
TRIGGER_EVENT_PATTERN = {
    "source": ["aws.iam"],
    "detail-type": ["AWS API Call via CloudTrail"],
    "detail": {
        "eventSource": ["iam.amazonaws.com"],
        "eventName": ["CreateUser"],
    },
}


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseSettings):
    """
    Manages env vars using Pydantic BaseSettings.
    A local .env file is read too, which is handy for run_live.py.
    """
    model_config = SettingsConfigDict(
        env_file='.env', env_file_encoding='utf-8', extra='ignore', populate_by_name=True
    )

    aws_region: str = Field("us-east-1", alias='AWS_REGION')
    temp_password_secret_id: str = Field("IAMUsersTemporaryPassword", alias='TEMP_PASSWORD_SECRET_ID')
    email_parameter_template: str = Field("/IAM/Users/{user_name}/Email", alias='EMAIL_PARAMETER_TEMPLATE')
    email_tag_key: str = Field("Email", alias='EMAIL_TAG_KEY')
    decrypt_email_parameter: bool = Field(True, alias='DECRYPT_EMAIL_PARAMETER')
    log_level: str = Field("INFO", alias='LOG_LEVEL')

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{value}'")
        return level


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()


# Data models
@dataclass
class CreationEvent:
    """
    A CreateUser notification as delivered by EventBridge.
    Only user_name is required; the rest is whatever CloudTrail recorded.
    """
    user_name: str
    event_name: Optional[str] = None
    event_source: Optional[str] = None
    event_time: Optional[str] = None
    actor_arn: Optional[str] = None
    aws_region: Optional[str] = None
    request_id: Optional[str] = None


@dataclass
class Principal:
    """An IAM user record with its tags flattened to a dict."""
    name: str
    arn: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)

    def tag(self, key: str) -> Optional[str]:
        return self.tags.get(key)


@dataclass
class UserNotification:
    """Everything the notifier resolved for one newly created user."""
    user_name: str
    temporary_password: str
    email: Optional[str] = None
    # "tag", "parameter" or None when no email could be found
    email_source: Optional[str] = None
    event: Optional[CreationEvent] = None
