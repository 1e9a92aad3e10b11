import logging

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


class CompletionClient:
    """Thin wrapper over the OpenAI chat completions API: messages in, text out."""

    def __init__(self, client: AsyncOpenAI, model: str):
        self.client = client
        self.model = model

    async def complete(
        self,
        messages: list[dict],
        max_tokens: int,
        temperature: float | None = None,
    ) -> str:
        params = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            params["temperature"] = temperature

        response = await self.client.chat.completions.create(**params)
        content = response.choices[0].message.content
        logger.debug("Completion from %s: %d chars", self.model, len(content or ""))
        return content or ""

    async def close(self) -> None:
        await self.client.close()


def create_completion_client(api_key: str, model: str) -> CompletionClient:
    return CompletionClient(AsyncOpenAI(api_key=api_key), model)
