"""OpenAI Responses API client for food parsing."""

import logging
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from macro_tracker.errors import UpstreamUnavailable
from macro_tracker.services.parser import InferenceClient

logger = logging.getLogger(__name__)


@dataclass
class OpenAIInferenceClient(InferenceClient):
    """Inference client backed by the OpenAI Responses API."""

    client: AsyncOpenAI
    store: bool = False

    @classmethod
    def create(
        cls, api_key: str, timeout_seconds: float, store: bool = False
    ) -> "OpenAIInferenceClient":
        """Create a client that fails fast instead of retrying."""
        return cls(
            client=AsyncOpenAI(api_key=api_key, timeout=timeout_seconds, max_retries=0),
            store=store,
        )

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        max_output_tokens: int,
        reasoning_effort: str | None = None,
    ) -> str:
        """Request a single non-streaming completion and return its text."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [{"role": "user", "content": prompt}],
            "max_output_tokens": max_output_tokens,
            "store": self.store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            logger.exception("OpenAI request failed", extra={"model": model})
            raise UpstreamUnavailable("Food parsing service is unavailable") from exc

        text = _first_text_segment(response)
        if not text:
            logger.warning(
                "OpenAI returned no text output",
                extra={"model": model, "status": getattr(response, "status", None)},
            )
            raise UpstreamUnavailable("Food parsing service returned no output")
        return text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _first_text_segment(response: object) -> str | None:
    """Return the text of the first message content part, if it is text."""
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            if getattr(part, "type", None) == "output_text":
                return part.text
            return None
    return None
