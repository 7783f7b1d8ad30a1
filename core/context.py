from collections.abc import Sequence

from memory.projections import reconstruct_chat
from memory.types import ChatMessage, ChatRole, InteractionRecord

API_ROLES = {ChatRole.USER: "user", ChatRole.AGENT: "assistant"}


class ChatTranscript:
    """In-memory chat transcript, seeded from the chat records of the log.

    The log stays the only durable copy; this list also carries apology
    messages for failed turns, which are never logged.
    """

    def __init__(self, messages: list[ChatMessage] | None = None):
        self.messages: list[ChatMessage] = list(messages or [])

    @classmethod
    def from_records(cls, records: Sequence[InteractionRecord]) -> "ChatTranscript":
        return cls(reconstruct_chat(records))

    def add(self, role: ChatRole, text: str, timestamp: int) -> ChatMessage:
        message = ChatMessage(role=role, text=text, timestamp=timestamp)
        self.messages.append(message)
        return message

    def get_messages(self) -> list[dict]:
        return [{"role": API_ROLES[m.role], "content": m.text} for m in self.messages]

    def clear(self) -> None:
        self.messages.clear()

    def __len__(self) -> int:
        return len(self.messages)
