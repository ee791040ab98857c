"""Tests for the OpenAI inference adapter."""

import asyncio
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from macro_tracker.adapters.openai_inference_client import OpenAIInferenceClient
from macro_tracker.errors import UpstreamUnavailable


def _message(*parts: SimpleNamespace) -> SimpleNamespace:
    return SimpleNamespace(type="message", content=list(parts))


def _text(text: str) -> SimpleNamespace:
    return SimpleNamespace(type="output_text", text=text)


class _FakeResponses:
    def __init__(
        self, output: list[object] | None = None, error: Exception | None = None
    ) -> None:
        self.output = output or []
        self.error = error
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        if self.error is not None:
            raise self.error
        return SimpleNamespace(output=self.output)


class _FakeOpenAI:
    def __init__(self, responses: _FakeResponses) -> None:
        self.responses = responses


def test_complete_returns_first_text_segment() -> None:
    responses = _FakeResponses(
        output=[
            SimpleNamespace(type="reasoning", content=None),
            _message(_text('{"name": "Egg"}'), _text("ignored")),
        ]
    )
    client = OpenAIInferenceClient(client=_FakeOpenAI(responses))

    text = asyncio.run(
        client.complete(model="gpt-5.2", prompt="Parse eggs", max_output_tokens=1024)
    )

    assert text == '{"name": "Egg"}'
    assert responses.last_payload is not None
    assert responses.last_payload["model"] == "gpt-5.2"
    assert responses.last_payload["max_output_tokens"] == 1024
    assert responses.last_payload["store"] is False
    assert "stream" not in responses.last_payload
    assert "reasoning" not in responses.last_payload


def test_complete_sends_reasoning_effort() -> None:
    responses = _FakeResponses(output=[_message(_text("{}"))])
    client = OpenAIInferenceClient(client=_FakeOpenAI(responses))

    asyncio.run(
        client.complete(
            model="gpt-5.2",
            prompt="Parse",
            max_output_tokens=2048,
            reasoning_effort="low",
        )
    )

    assert responses.last_payload is not None
    assert responses.last_payload["reasoning"] == {"effort": "low"}


@pytest.mark.parametrize(
    "output",
    [
        [],
        [SimpleNamespace(type="reasoning", content=None)],
        [_message(SimpleNamespace(type="refusal", refusal="no"))],
        [_message(_text(""))],
    ],
)
def test_complete_without_text_is_upstream_unavailable(output: list[object]) -> None:
    client = OpenAIInferenceClient(client=_FakeOpenAI(_FakeResponses(output=output)))

    with pytest.raises(UpstreamUnavailable):
        asyncio.run(
            client.complete(model="gpt-5.2", prompt="Parse", max_output_tokens=10)
        )


def test_complete_wraps_api_errors() -> None:
    error = APIConnectionError(
        request=httpx.Request("POST", "https://api.openai.com/v1/responses")
    )
    client = OpenAIInferenceClient(client=_FakeOpenAI(_FakeResponses(error=error)))

    with pytest.raises(UpstreamUnavailable):
        asyncio.run(
            client.complete(model="gpt-5.2", prompt="Parse", max_output_tokens=10)
        )


def test_create_disables_client_retries() -> None:
    client = OpenAIInferenceClient.create(api_key="key", timeout_seconds=12.5)

    assert client.client.max_retries == 0
    assert client.client.timeout == 12.5
    asyncio.run(client.close())
