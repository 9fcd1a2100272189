"""OpenAI Responses API client for food categorization."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from pantrypal.services.catalog import CategorizerClient


@dataclass
class OpenAICategorizerClient(CategorizerClient):
    """Categorizer client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAICategorizerClient":
        """Create an OpenAI categorizer client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def classify(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        response = await self.client.responses.create(
            model=model,
            input=[
                {
                    "role": "system",
                    "content": (
                        "You are a food categorization assistant. "
                        "Respond with the single best category."
                    ),
                },
                {"role": "user", "content": prompt},
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "food_category",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def close(self) -> None:
        """Close the underlying OpenAI HTTP client."""
        await self.client.close()
