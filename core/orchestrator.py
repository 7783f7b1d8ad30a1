import logging

from core.config import Config
from core.context import ChatTranscript
from core.types import Response
from llm.client import GenerationError, LLMClient
from memory.log import InteractionLog, now_ms
from memory.projections import compute_stats
from memory.types import Category, ChatRole, UsageStats

logger = logging.getLogger(__name__)


class Orchestrator:
    def __init__(self, config: Config, llm_client: LLMClient, log: InteractionLog):
        self.config = config
        self.llm = llm_client
        self.log = log
        self.transcript = ChatTranscript.from_records(log.all())

    async def run_task(self, task: Category, primary: str, secondary: str | None = None) -> Response:
        """Run one agent task and log the exchange.

        Generation failures come back as an error response carrying the
        configured apology; nothing is logged for them.
        """
        task = Category(task)
        if task == Category.CHAT:
            raise ValueError("chat turns go through Orchestrator.chat")
        if task == Category.TEST_GENERATION and not secondary:
            secondary = self.config.llm.default_framework

        try:
            text = await self.llm.generate(task, primary, secondary)
        except GenerationError:
            logger.exception("Generation failed for %s", task)
            return Response(text=self.config.chat.error_message, is_error=True)

        metadata = {"secondary": secondary} if secondary else None
        record = self.log.append(task, primary, text, metadata)
        return Response(text=text, record=record)

    async def chat(self, message: str) -> Response | None:
        """Send one chat turn. Blank input is ignored and returns None."""
        if not message.strip():
            return None

        history = self.transcript.get_messages()
        self.transcript.add(ChatRole.USER, message, now_ms())

        try:
            text = await self.llm.chat(history, message)
        except GenerationError:
            logger.exception("Chat generation failed")
            apology = self.config.chat.error_message
            self.transcript.add(ChatRole.AGENT, apology, now_ms())
            return Response(text=apology, is_error=True)

        self.transcript.add(ChatRole.AGENT, text, now_ms())
        record = self.log.append(Category.CHAT, message, text)
        return Response(text=text, record=record)

    def clear_chat(self) -> None:
        self.transcript.clear()
        self.log.remove_category(Category.CHAT)

    def stats(self) -> UsageStats:
        return compute_stats(self.log.all())
