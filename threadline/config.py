"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PendingContextPolicy = Literal["author_only", "indeterminate", "address_owner"]


class ThreadingSettings(BaseModel):
    """Thread reconstruction configuration."""

    # Treat the first unmarked "e" tag of a kind 1 note as its root
    # (deprecated NIP-10 positional scheme). Off by default: an unmarked
    # note is its own root.
    positional_nip10_fallback: bool = False

    # Deepest depth a comment may be rendered at. Deeper replies are
    # re-attached one level above so they render at this depth. None keeps
    # the full tree.
    max_depth: int | None = Field(default=None, ge=0)


class StatusSettings(BaseModel):
    """Status resolution configuration."""

    # What to do while the owning repository has not been resolved yet:
    # - author_only: only the item author may set status
    # - indeterminate: report the implicit default until the repository loads
    # - address_owner: also trust the owner named in the item's "a" tag,
    #   recorded as the owner of the incomplete authorization context
    pending_context_policy: PendingContextPolicy = "author_only"

    # Matches the relay query limit used when subscribing to status events
    query_limit: int = Field(default=10, ge=1)


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using ``__`` for nested values:

        ENVIRONMENT=production
        THREADING__MAX_DEPTH=1
        STATUS__PENDING_CONTEXT_POLICY=indeterminate
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Nested settings
    threading: ThreadingSettings = ThreadingSettings()
    status: StatusSettings = StatusSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
