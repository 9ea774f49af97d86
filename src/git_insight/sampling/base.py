from abc import ABC, abstractmethod

from pydantic import BaseModel


class StructuredGenerationBackend(ABC):
    """A generative model that answers a prompt with JSON text constrained to a pydantic model's schema."""

    default_model: str

    @abstractmethod
    async def generate_json(self, system_prompt: str, prompt: str, response_model: type[BaseModel]) -> str | None:
        """Return the raw JSON text produced by the model, or None when the model produced nothing."""
