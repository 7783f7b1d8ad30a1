from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Category(StrEnum):
    TEST_GENERATION = "test-generation"
    DEBUGGING = "debugging"
    REVIEW = "review"
    LOG_ANALYSIS = "log-analysis"
    REFACTOR = "refactor"
    CHAT = "chat"


class ChatRole(StrEnum):
    USER = "user"
    AGENT = "agent"


class InteractionRecord(BaseModel):
    """One logged agent invocation, stored newest-first in the interaction log.

    Serialized with the field names of the persisted blob (``createdAt``);
    in Python the timestamp is ``created_at``, in milliseconds since epoch.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    category: Category
    input: str
    output: str
    created_at: int = Field(alias="createdAt")
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass
class ChatMessage:
    role: ChatRole
    text: str
    timestamp: int  # ms since epoch


@dataclass
class UsageStats:
    tests: int = 0
    bugs: int = 0
    reviews: int = 0
    logs: int = 0
    refactors: int = 0
    chats: int = 0
    total: int = 0

    def by_category(self) -> dict[Category, int]:
        return {
            Category.TEST_GENERATION: self.tests,
            Category.DEBUGGING: self.bugs,
            Category.REVIEW: self.reviews,
            Category.LOG_ANALYSIS: self.logs,
            Category.REFACTOR: self.refactors,
            Category.CHAT: self.chats,
        }
