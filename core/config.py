"""Configuration settings for the LuAI assistant."""
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

from core.errors import ConfigError


API_KEY_VARS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}

DEFAULT_MODELS = {
    "anthropic": "claude-haiku-4-5",
    "openai": "gpt-4o",
}


def _env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    """Read a numeric environment variable; unset or empty gives `default`."""
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got '{value}'") from e


class ModelConfig(BaseModel):
    """Configuration for LLM models."""
    provider: Literal["anthropic", "openai"] = Field(
        default="anthropic",
        description="LLM provider"
    )

    model_name: str = Field(
        default="claude-haiku-4-5",
        description="Model name to use"
    )

    api_key: str = Field(
        default="",
        description="API key for the selected provider"
    )

    temperature: Optional[float] = Field(
        default=None,
        description="Temperature for model responses (provider default when unset)"
    )

    agent_max_tokens: int = Field(
        default=4096,
        description="Maximum output tokens for per-source analysis calls"
    )

    synthesis_max_tokens: int = Field(
        default=8192,
        description="Maximum output tokens for the final decision call"
    )


class FetchConfig(BaseModel):
    """Configuration for the page fetcher."""
    user_agent: str = Field(
        default="LuAI Legal Assistant / 0.1.0",
        description="User-Agent header sent with every request"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for a single page request"
    )


class AgentConfig(BaseModel):
    """Configuration for agent behavior."""
    max_source_chars: int = Field(
        default=150_000,
        description="Source text is truncated to this many characters before prompting"
    )


class PortalConfig(BaseModel):
    """Configuration for the SuperSapiens task portal."""
    tasks_url: str = Field(
        default="https://supersapiens.agu.gov.br/apps/tarefas/judicial/minhas-tarefas/entrada",
        description="Task inbox URL"
    )

    email: str = Field(default="", description="Rede AGU login")
    password: str = Field(default="", description="Rede AGU password")

    headless: bool = Field(
        default=False,
        description="Run the browser without a window"
    )

    slow_mo_ms: int = Field(
        default=300,
        description="Delay between browser actions"
    )

    navigation_timeout_ms: int = Field(default=60_000)
    element_timeout_ms: int = Field(default=20_000)

    max_scrolls: int = Field(
        default=30,
        description="Maximum scroll passes while loading the task list"
    )

    scroll_pause_ms: int = Field(default=1_500)

    output_dir: Path = Field(
        default=Path("downloads"),
        description="Directory for the JSON snapshot and screenshot"
    )

    @classmethod
    def from_env(cls) -> "PortalConfig":
        """Create portal config from environment variables."""
        email = os.getenv("AGU_EMAIL", "")
        password = os.getenv("AGU_SENHA", "")
        if not email or not password:
            raise ConfigError("AGU_EMAIL and AGU_SENHA must be set in your .env file.")

        return cls(
            email=email,
            password=password,
            headless=os.getenv("PORTAL_HEADLESS", "false").lower() == "true",
            output_dir=Path(os.getenv("PORTAL_OUTPUT_DIR", "downloads")).resolve()
        )


class LuAIConfig(BaseModel):
    """Main configuration for the LuAI assistant."""
    model: ModelConfig = Field(
        default_factory=ModelConfig,
        description="Model configuration"
    )

    fetch: FetchConfig = Field(
        default_factory=FetchConfig,
        description="Page fetcher configuration"
    )

    agents: AgentConfig = Field(
        default_factory=AgentConfig,
        description="Agent configuration"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    @classmethod
    def from_env(cls) -> "LuAIConfig":
        """Create config from environment variables.

        Raises:
            ConfigError: if the provider is unknown or its API key is not set
        """
        provider = os.getenv("MODEL_PROVIDER", "anthropic").lower()
        key_var = API_KEY_VARS.get(provider)
        if key_var is None:
            raise ConfigError(
                f"Unknown MODEL_PROVIDER '{provider}'. Use one of: {', '.join(API_KEY_VARS)}"
            )

        api_key = os.getenv(key_var, "")
        if not api_key:
            raise ConfigError(f"{key_var} is not set. Copy .env.example to .env and add your key.")

        return cls(
            model=ModelConfig(
                provider=provider,
                model_name=os.getenv("MODEL_NAME", DEFAULT_MODELS[provider]),
                api_key=api_key,
                temperature=_env_float("MODEL_TEMPERATURE")
            ),
            fetch=FetchConfig(
                timeout_seconds=_env_float("FETCH_TIMEOUT", 30.0)
            ),
            agents=AgentConfig(),
            debug=os.getenv("DEBUG", "false").lower() == "true"
        )
