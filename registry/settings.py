"""Trigger settings using Pydantic Settings.

Every value can be overridden with a LIFECYCLE_* environment variable or a
.env file, e.g. LIFECYCLE_NAME_FIELD=title__c.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Mapping

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from registry.labels import DEFAULT_MESSAGE, DEFAULT_SUBJECT, MessageTemplate, build_label_table

LOG_FORMAT = "%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s"


class TriggerSettings(BaseSettings):
    """Settings for the registration lifecycle trigger."""

    model_config = SettingsConfigDict(
        env_prefix="LIFECYCLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Which record events the trigger is registered for
    object_name: str = Field(default="registration__rim", description="Host object name")
    event_type: str = Field(default="AFTER_UPDATE", description="Record event to react to")

    # Host field names
    state_field: str = Field(default="state__v")
    responsible_party_field: str = Field(default="responsible_person__c")
    name_field: str = Field(default="name__v")
    id_field: str = Field(default="id")

    # Message
    subject: str = Field(default=DEFAULT_SUBJECT)
    message_template: str = Field(default=DEFAULT_MESSAGE)
    extra_state_labels: dict[str, str] = Field(
        default_factory=dict,
        description="Additional state code -> label entries"
    )

    users_file: Path = Field(
        default=Path(__file__).parent.parent / "data" / "users.json",
        description="JSON fixture backing the user directory"
    )
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def field_map(self) -> dict[str, str]:
        """Snapshot attribute -> host field name."""
        return {
            "id": self.id_field,
            "state": self.state_field,
            "responsible_party": self.responsible_party_field,
            "name": self.name_field,
        }

    @property
    def state_labels(self) -> Mapping[str, str]:
        return build_label_table(self.extra_state_labels)

    @property
    def template(self) -> MessageTemplate:
        return MessageTemplate(subject=self.subject, body=self.message_template)


@lru_cache()
def get_settings() -> TriggerSettings:
    """Get cached settings instance."""
    return TriggerSettings()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the API and CLI."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
