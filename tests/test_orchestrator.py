from unittest.mock import AsyncMock, MagicMock

import pytest

from core.context import ChatTranscript
from core.orchestrator import Orchestrator
from llm.client import GenerationError
from memory.types import Category, ChatRole


@pytest.fixture
def mock_llm():
    llm = MagicMock()
    llm.generate = AsyncMock(return_value="generated")
    llm.chat = AsyncMock(return_value="reply")
    return llm


@pytest.fixture
def orchestrator(config, mock_llm, log):
    return Orchestrator(config=config, llm_client=mock_llm, log=log)


def test_transcript_add_and_format():
    ctx = ChatTranscript()
    ctx.add(ChatRole.USER, "what time is it", 1)
    ctx.add(ChatRole.AGENT, "it's 3pm", 2)
    assert ctx.get_messages() == [
        {"role": "user", "content": "what time is it"},
        {"role": "assistant", "content": "it's 3pm"},
    ]


def test_transcript_clear():
    ctx = ChatTranscript()
    ctx.add(ChatRole.USER, "test", 1)
    ctx.clear()
    assert len(ctx) == 0


def test_transcript_seeded_from_log(config, mock_llm, log):
    log.append(Category.CHAT, "q1", "a1")
    log.append(Category.REVIEW, "code", "report")
    log.append(Category.CHAT, "q2", "a2")
    orch = Orchestrator(config=config, llm_client=mock_llm, log=log)
    assert [m["content"] for m in orch.transcript.get_messages()] == ["q1", "a1", "q2", "a2"]


@pytest.mark.asyncio
async def test_run_task_logs_record(orchestrator, mock_llm, log):
    response = await orchestrator.run_task(Category.DEBUGGING, "code", "Traceback ...")
    assert response.text == "generated"
    assert not response.is_error
    mock_llm.generate.assert_awaited_once_with(Category.DEBUGGING, "code", "Traceback ...")
    records = log.all()
    assert len(records) == 1
    assert records[0] == response.record
    assert records[0].metadata == {"secondary": "Traceback ..."}


@pytest.mark.asyncio
async def test_run_task_default_framework(orchestrator, mock_llm, config):
    await orchestrator.run_task(Category.TEST_GENERATION, "def f(): pass")
    mock_llm.generate.assert_awaited_once_with(
        Category.TEST_GENERATION, "def f(): pass", config.llm.default_framework
    )


@pytest.mark.asyncio
async def test_run_task_failure_not_logged(orchestrator, mock_llm, log, config):
    mock_llm.generate = AsyncMock(side_effect=GenerationError("no key"))
    response = await orchestrator.run_task(Category.REVIEW, "code")
    assert response.is_error
    assert response.text == config.chat.error_message
    assert response.record is None
    assert log.all() == []


@pytest.mark.asyncio
async def test_run_task_rejects_chat(orchestrator):
    with pytest.raises(ValueError):
        await orchestrator.run_task(Category.CHAT, "hi")


@pytest.mark.asyncio
async def test_chat_turn(orchestrator, mock_llm, log):
    await orchestrator.chat("first")
    response = await orchestrator.chat("second")
    assert response.text == "reply"
    # history excludes the message being sent
    history, message = mock_llm.chat.await_args.args
    assert message == "second"
    assert history == [{"role": "user", "content": "first"}, {"role": "assistant", "content": "reply"}]
    assert [r.input for r in log.all()] == ["second", "first"]
    assert len(orchestrator.transcript) == 4


@pytest.mark.asyncio
async def test_chat_blank_ignored(orchestrator, mock_llm):
    assert await orchestrator.chat("   ") is None
    mock_llm.chat.assert_not_awaited()


@pytest.mark.asyncio
async def test_chat_failure_apologizes(orchestrator, mock_llm, log, config):
    mock_llm.chat = AsyncMock(side_effect=GenerationError("down"))
    response = await orchestrator.chat("hello?")
    assert response.is_error
    last = orchestrator.transcript.messages[-1]
    assert last.role == ChatRole.AGENT
    assert last.text == config.chat.error_message
    assert log.all() == []


@pytest.mark.asyncio
async def test_clear_chat_keeps_other_records(orchestrator, log):
    await orchestrator.chat("hi")
    await orchestrator.run_task(Category.REFACTOR, "code")
    orchestrator.clear_chat()
    assert len(orchestrator.transcript) == 0
    assert [r.category for r in log.all()] == [Category.REFACTOR]
    assert orchestrator.stats().chats == 0
    assert orchestrator.stats().refactors == 1
