import os

from fastmcp.utilities.logging import get_logger

from git_insight.sampling.base import StructuredGenerationBackend
from git_insight.sampling.google_genai import GoogleGenaiBackend
from git_insight.sampling.openai_chat import OpenAIBackend

logger = get_logger(__name__)


def get_generation_backend() -> StructuredGenerationBackend | None:
    if os.getenv("GOOGLE_API_KEY"):
        return GoogleGenaiBackend(default_model=os.getenv("GOOGLE_MODEL") or "gemini-2.5-flash")

    if os.getenv("OPENAI_API_KEY"):
        return OpenAIBackend(default_model=os.getenv("OPENAI_MODEL") or "gpt-4o")

    logger.warning(
        msg=(
            "No generation backend found, profile analysis will always return the fallback result. "
            "Set GOOGLE_API_KEY or OPENAI_API_KEY to enable profile analysis."
        )
    )

    return None
