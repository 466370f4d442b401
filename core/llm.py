"""Chat model construction and the streaming call shared by all agents."""
import logging
from typing import List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage

from core.config import ModelConfig
from core.errors import ConfigError, UpstreamError

logger = logging.getLogger(__name__)


def build_chat_model(config: ModelConfig, max_tokens: int) -> BaseChatModel:
    """Create a chat model for the configured provider.

    Args:
        config: Model settings, including the API key
        max_tokens: Maximum output tokens for calls made with this model

    Returns:
        A LangChain chat model
    """
    if not config.api_key:
        raise ConfigError(f"No API key configured for provider '{config.provider}'")

    kwargs = {"model": config.model_name, "max_tokens": max_tokens, "api_key": config.api_key}
    if config.temperature is not None:
        kwargs["temperature"] = config.temperature

    if config.provider == "anthropic":
        from langchain_anthropic import ChatAnthropic
        return ChatAnthropic(**kwargs)

    if config.provider == "openai":
        from langchain_openai import ChatOpenAI
        return ChatOpenAI(**kwargs)

    raise ConfigError(f"Unsupported model provider: {config.provider}")


def first_text_block(message: Optional[BaseMessage]) -> str:
    """Return the first text block of a model reply, or "" if there is none.

    Plain string content counts as a single text block. Other block types
    (thinking, tool use) are skipped.
    """
    if message is None:
        return ""

    content = message.content
    if isinstance(content, str):
        return content

    for block in content:
        if isinstance(block, str):
            return block
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text", "")

    return ""


async def stream_reply(llm: BaseChatModel, messages: List[BaseMessage]) -> str:
    """Stream one completion, assemble the final message and return its text.

    Raises:
        UpstreamError: if the model call fails for any reason
    """
    final = None
    try:
        async for chunk in llm.astream(messages):
            final = chunk if final is None else final + chunk
    except Exception as e:
        logger.error("Model call failed: %s", str(e)[:200])
        raise UpstreamError(f"Model call failed: {e}") from e

    return first_text_block(final)
