"""LLM client construction (OpenRouter or OpenAI)."""

from langchain_openai import ChatOpenAI

from src.config import Settings
from src.core.logging import get_logger

logger = get_logger("llm")

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

SUPPORTED_MODELS = {
    "gpt-4o-mini": {
        "openrouter_id": "openai/gpt-4o-mini",
        "openai_id": "gpt-4o-mini",
        "json_mode": True,
    },
    "gpt-4o": {
        "openrouter_id": "openai/gpt-4o",
        "openai_id": "gpt-4o",
        "json_mode": True,
    },
    "claude-sonnet-4": {
        "openrouter_id": "anthropic/claude-sonnet-4",
        "openai_id": None,
        "json_mode": False,
    },
    "deepseek-r1": {
        "openrouter_id": "deepseek/deepseek-r1",
        "openai_id": None,
        "json_mode": False,
    },
}


def create_chat_llm(settings: Settings, model: str | None = None) -> ChatOpenAI:
    """Build a chat LLM from explicit settings.

    OpenRouter is preferred when its key is configured; otherwise the OpenAI
    API is used directly, which only serves OpenAI models.
    """
    name = model or settings.analysis_model
    config = SUPPORTED_MODELS.get(name, SUPPORTED_MODELS["gpt-4o-mini"])

    model_kwargs = {"response_format": {"type": "json_object"}} if config["json_mode"] else {}

    if settings.openrouter_api_key:
        logger.info(f"[LLM] Using OpenRouter: {name} -> {config['openrouter_id']}")
        return ChatOpenAI(
            model=config["openrouter_id"],
            api_key=settings.openrouter_api_key,
            base_url=OPENROUTER_BASE_URL,
            temperature=settings.analysis_temperature,
            model_kwargs=model_kwargs,
        )

    if settings.openai_api_key:
        if not config["openai_id"]:
            raise ValueError(f"Model {name} requires OPENROUTER_API_KEY")
        logger.info(f"[LLM] Using OpenAI: {name} -> {config['openai_id']}")
        return ChatOpenAI(
            model=config["openai_id"],
            api_key=settings.openai_api_key,
            temperature=settings.analysis_temperature,
            model_kwargs=model_kwargs,
        )

    raise ValueError("OPENROUTER_API_KEY or OPENAI_API_KEY must be configured")
