import logging
import os

from openai import AsyncOpenAI, OpenAIError

from core.config import LLMConfig
from llm.prompts import CHAT_SYSTEM_PROMPT, build_task_prompt
from memory.types import Category

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response generated."
NO_CHAT_RESPONSE = "I couldn't generate a response."


class GenerationError(RuntimeError):
    """The backend could not produce a completion (missing key, API failure)."""


class LLMClient:
    def __init__(self, config: LLMConfig):
        self.config = config
        self._client: AsyncOpenAI | None = None
        if config.backend == "api":
            self.base_url = config.api.base_url
            self.model = config.api.model
        else:
            self.base_url = config.local.base_url
            self.model = config.local.model

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if self.config.backend == "api":
                api_key = os.environ.get(self.config.api.api_key_env, "")
                if not api_key:
                    raise GenerationError(f"{self.config.api.api_key_env} environment variable is missing.")
            else:
                api_key = "not-needed"
            self._client = AsyncOpenAI(base_url=self.base_url, api_key=api_key)
        return self._client

    async def _complete(self, messages: list[dict]) -> str | None:
        client = self._get_client()
        try:
            response = await client.chat.completions.create(model=self.model, messages=messages)
        except OpenAIError as e:
            raise GenerationError(f"{type(e).__name__}: {e}") from e
        return response.choices[0].message.content

    async def generate(self, task: Category, primary: str, secondary: str | None = None) -> str:
        """Run one agent task and return its Markdown answer."""
        prompt = build_task_prompt(task, primary, secondary)
        logger.info("Generating %s (%d chars of input)", task, len(primary))
        content = await self._complete([{"role": "user", "content": prompt}])
        return content or NO_RESPONSE

    async def chat(self, history: list[dict], message: str) -> str:
        """Send ``message`` after ``history`` (``role``/``content`` dicts)."""
        messages: list[dict] = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
        messages.extend(history)
        messages.append({"role": "user", "content": message})
        content = await self._complete(messages)
        return content or NO_CHAT_RESPONSE

    async def health(self) -> dict:
        """Check if LLM endpoint is reachable."""
        try:
            await self._get_client().models.list()
            return {"status": "ok", "model": self.model, "backend": self.config.backend}
        except (GenerationError, OpenAIError) as e:
            return {"status": "error", "error": str(e)}
