from dataclasses import dataclass

from memory.types import InteractionRecord


@dataclass
class Response:
    text: str
    record: InteractionRecord | None = None  # None when nothing was logged
    is_error: bool = False
