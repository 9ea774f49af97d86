from typing import Any, override

from openai import AsyncOpenAI
from pydantic import BaseModel

from git_insight.sampling.base import StructuredGenerationBackend


def strict_json_schema_format(response_model: type[BaseModel]) -> dict[str, Any]:
    """Build a strict `json_schema` response format from a pydantic model."""

    return {
        "type": "json_schema",
        "json_schema": {
            "name": response_model.__name__,
            "schema": response_model.model_json_schema(),
            "strict": True,
        },
    }


class OpenAIBackend(StructuredGenerationBackend):
    def __init__(self, default_model: str, client: AsyncOpenAI | None = None):
        self.client: AsyncOpenAI = client or AsyncOpenAI()
        self.default_model: str = default_model

    @override
    async def generate_json(self, system_prompt: str, prompt: str, response_model: type[BaseModel]) -> str | None:
        completion = await self.client.chat.completions.create(
            model=self.default_model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            response_format=strict_json_schema_format(response_model),  # pyright: ignore[reportArgumentType]
        )

        if not completion.choices:
            msg = "No choices in response from completion."
            raise ValueError(msg)

        return completion.choices[0].message.content
