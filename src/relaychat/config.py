"""Configuration for the relay and the client.

Fixed literals shown to the user live here as module constants. Values that
vary per deployment come from the process environment (and a local .env
file) through Settings.from_env().
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Provider
DEFAULT_MODEL = "gemini-2.5-flash"

# Server binding (all interfaces so devices on the LAN can reach it)
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
ASK_PATH = "/ask"

# Client
DEFAULT_RELAY_URL = f"http://localhost:{DEFAULT_PORT}"

# Texts shown in the conversation
PENDING_TEXT = "..."
ERROR_TEXT = "⚠️ Something went wrong"
EMPTY_REPLY_TEXT = "No reply"

# Texts returned by the relay
PROMPT_REQUIRED_MESSAGE = "Prompt is required"
GENERIC_ERROR_MESSAGE = "Something went wrong."
NO_TEXT_REPLY = "No response text (see server logs)"


class Settings(BaseModel):
    """Runtime settings for both sides of the relay."""

    model_config = ConfigDict(frozen=True)

    gemini_api_key: str | None = Field(
        default=None,
        description="Provider API key; not validated here, a bad key fails on the first call",
    )
    gemini_model: str = Field(default=DEFAULT_MODEL, description="Provider model identifier")
    host: str = Field(default=DEFAULT_HOST, description="Interface the relay binds to")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Port the relay listens on")
    relay_url: str = Field(default=DEFAULT_RELAY_URL, description="Base URL the client posts to")
    log_level: str = Field(default="INFO", description="Root log level")

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from environment variables.

        Environment variables:
            GEMINI_API_KEY: Provider API key
            GEMINI_MODEL: Model identifier (default: gemini-2.5-flash)
            RELAY_HOST: Bind address (default: 0.0.0.0)
            RELAY_PORT: Bind port (default: 3000)
            RELAY_URL: Relay base URL used by the client
            LOG_LEVEL: Log level name (default: INFO)
        """
        if load_env_file:
            load_dotenv()

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            host=os.getenv("RELAY_HOST", DEFAULT_HOST),
            port=int(os.getenv("RELAY_PORT", str(DEFAULT_PORT))),
            relay_url=os.getenv("RELAY_URL", DEFAULT_RELAY_URL),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
