"""
Tests for CompletionClient
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

from app.core.llm import CompletionClient


def openai_stub(content):
    response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    client = Mock()
    client.chat.completions.create = AsyncMock(return_value=response)
    return client


@pytest.mark.asyncio
async def test_complete_passes_budget_and_temperature():
    stub = openai_stub("Hola")
    llm = CompletionClient(stub, "gpt-4o")

    reply = await llm.complete([{"role": "user", "content": "hi"}], max_tokens=300, temperature=0.7)

    assert reply == "Hola"
    stub.chat.completions.create.assert_awaited_once_with(
        model="gpt-4o",
        messages=[{"role": "user", "content": "hi"}],
        max_tokens=300,
        temperature=0.7,
    )


@pytest.mark.asyncio
async def test_complete_omits_temperature_by_default():
    stub = openai_stub("plan")
    llm = CompletionClient(stub, "gpt-4o-mini")

    await llm.complete([{"role": "user", "content": "plan please"}], max_tokens=500)

    kwargs = stub.chat.completions.create.await_args.kwargs
    assert "temperature" not in kwargs
    assert kwargs["model"] == "gpt-4o-mini"


@pytest.mark.asyncio
async def test_empty_content_reads_as_empty_string():
    llm = CompletionClient(openai_stub(None), "gpt-4o")
    assert await llm.complete([], max_tokens=10) == ""


@pytest.mark.asyncio
async def test_api_errors_propagate():
    stub = Mock()
    stub.chat.completions.create = AsyncMock(side_effect=RuntimeError("boom"))
    llm = CompletionClient(stub, "gpt-4o")

    with pytest.raises(RuntimeError):
        await llm.complete([], max_tokens=10)
