"""
Configuration Schema

Pydantic models describing the groups configuration file.

Example file:
    logging:
      level: INFO
    matching:
      ignore_case: true
    statements:
      - action: group
        groups: [team, staff]
        addresses: ["Alice <alice@example.com>"]
        patterns: ["^boss@"]
      - action: ungroup
        groups: [temp]
        all: true
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict


class LoggingSettings(BaseModel):
    """Logging configuration section."""
    level: str = Field(default="WARNING", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: Literal["plain", "json"] = Field(default="plain", description="Log line format")
    file: Optional[str] = Field(default=None, description="Optional log file path")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper().strip()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level


class MatchingSettings(BaseModel):
    """Regex matching configuration section."""
    ignore_case: bool = Field(default=True, description="Compile group patterns with re.IGNORECASE")


class GroupStatementSchema(BaseModel):
    """
    One group/ungroup statement.

    `group` adds addresses and patterns to every named group. `ungroup`
    removes them, or destroys the named groups outright when `all` is set.
    """
    action: Literal["group", "ungroup"] = Field(default="group", description="Statement kind")
    groups: list[str] = Field(..., description="Names of the groups the statement applies to")
    addresses: list[str] = Field(default_factory=list, description="Mailboxes, optionally with display names")
    patterns: list[str] = Field(default_factory=list, description="Regular expressions")
    all: bool = Field(default=False, description="ungroup only: destroy the named groups entirely")

    model_config = ConfigDict(extra="forbid")

    @field_validator('action', mode='before')
    @classmethod
    def normalize_action(cls, v):
        """Accept action names in any case."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator('groups')
    @classmethod
    def validate_groups(cls, v: list[str]) -> list[str]:
        """Validate group names are present and non-empty."""
        if not v:
            raise ValueError("A statement must name at least one group")
        for name in v:
            if not name or not name.strip():
                raise ValueError(f"Group name cannot be empty: {v}")
        return [name.strip() for name in v]

    @model_validator(mode='after')
    def validate_payload(self) -> 'GroupStatementSchema':
        """Validate the statement carries something to apply."""
        has_payload = bool(self.addresses or self.patterns)
        if self.all:
            if self.action != "ungroup":
                raise ValueError("'all' is only valid for ungroup statements")
            if has_payload:
                raise ValueError("'all' cannot be combined with addresses or patterns")
        elif not has_payload:
            raise ValueError(f"{self.action} statement needs addresses or patterns")
        return self


class GroupsConfigSchema(BaseModel):
    """Top-level configuration."""
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    statements: list[GroupStatementSchema] = Field(default_factory=list)

    model_config = ConfigDict(
        extra="forbid",  # Reject any extra fields not in schema
        validate_assignment=True
    )
