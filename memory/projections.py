from collections import Counter
from collections.abc import Sequence

from memory.types import Category, ChatMessage, ChatRole, InteractionRecord, UsageStats


def compute_stats(records: Sequence[InteractionRecord]) -> UsageStats:
    """Per-category usage counts for the dashboard, recomputed on each call."""
    counts = Counter(r.category for r in records)
    return UsageStats(
        tests=counts[Category.TEST_GENERATION],
        bugs=counts[Category.DEBUGGING],
        reviews=counts[Category.REVIEW],
        logs=counts[Category.LOG_ANALYSIS],
        refactors=counts[Category.REFACTOR],
        chats=counts[Category.CHAT],
        total=len(records),
    )


def reconstruct_chat(records: Sequence[InteractionRecord]) -> list[ChatMessage]:
    """Rebuild the chat transcript, oldest first, from the shared log.

    Each chat record becomes a user message at ``created_at`` followed by the
    agent reply at ``created_at + 1`` so the pair sorts stably even when it
    was logged within one millisecond. Exchanges from different records that
    share a millisecond keep their relative log order only through the
    stable sort.
    """
    chat_records = sorted(
        (r for r in records if r.category == Category.CHAT),
        key=lambda r: r.created_at,
    )
    messages: list[ChatMessage] = []
    for record in chat_records:
        messages.append(ChatMessage(role=ChatRole.USER, text=record.input, timestamp=record.created_at))
        messages.append(ChatMessage(role=ChatRole.AGENT, text=record.output, timestamp=record.created_at + 1))
    return messages
