from typing import override

from google.genai import Client as GoogleGenaiClient
from google.genai.types import Candidate, GenerateContentConfig, GenerateContentResponse
from pydantic import BaseModel

from git_insight.sampling.base import StructuredGenerationBackend

JSON_MIME_TYPE = "application/json"


class GoogleGenaiBackend(StructuredGenerationBackend):
    def __init__(self, default_model: str, client: GoogleGenaiClient | None = None):
        self.client: GoogleGenaiClient = client or GoogleGenaiClient()
        self.default_model: str = default_model

    @override
    async def generate_json(self, system_prompt: str, prompt: str, response_model: type[BaseModel]) -> str | None:
        response: GenerateContentResponse = await self.client.aio.models.generate_content(
            model=self.default_model,
            contents=prompt,
            config=GenerateContentConfig(
                system_instruction=system_prompt,
                response_mime_type=JSON_MIME_TYPE,
                response_schema=response_model,
            ),
        )

        if not (text := response.text):
            candidate = get_candidate_from_response(response)

            msg = f"No content in response from completion: {candidate.finish_reason}"
            raise ValueError(msg)

        return text


def get_candidate_from_response(response: GenerateContentResponse) -> Candidate:
    if response.candidates and response.candidates[0]:
        return response.candidates[0]

    msg = "No candidate in response from completion."
    raise ValueError(msg)
