"""Free-text food parsing using an LLM."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from macro_tracker.domain.foods import ParsedFood
from macro_tracker.errors import ParseError

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """Parse the following food description and return nutritional information.

Input: "{input}"

Return a JSON object with this exact structure (no markdown, just raw JSON):
{{
  "name": "food name",
  "servings": 1,
  "serving_unit": "description of one serving (e.g., '1 large egg', '1 cup', '100g')",
  "calories_per_serving": number,
  "protein_per_serving": number in grams,
  "carbs_per_serving": number in grams,
  "fat_per_serving": number in grams
}}

Examples:
- "2 eggs" -> name: "Egg", servings: 2, serving_unit: "1 large egg", calories_per_serving: 78, protein_per_serving: 6, carbs_per_serving: 0.6, fat_per_serving: 5
- "bowl of oatmeal" -> name: "Oatmeal", servings: 1, serving_unit: "1 cup cooked", calories_per_serving: 150, protein_per_serving: 5, carbs_per_serving: 27, fat_per_serving: 3
- "grilled chicken breast" -> name: "Chicken Breast", servings: 1, serving_unit: "6 oz grilled", calories_per_serving: 280, protein_per_serving: 53, carbs_per_serving: 0, fat_per_serving: 6

Use your knowledge of nutrition to provide accurate estimates. If quantities are mentioned (like "2 eggs"), set servings accordingly. Return only the JSON object."""  # noqa: E501


class InferenceClient(Protocol):
    """Interface for a single non-streaming text completion."""

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        max_output_tokens: int,
        reasoning_effort: str | None = None,
    ) -> str:
        """Return the text of the first output segment.

        Raises ``UpstreamUnavailable`` when the call fails or yields no text.
        """


@dataclass
class FoodParserService:
    """Service that prompts the model and validates its food record."""

    client: InferenceClient
    model: str
    max_output_tokens: int = 2048
    reasoning_effort: str | None = None

    async def parse(self, text: str) -> ParsedFood:
        """Turn a free-text food description into a structured record."""
        raw_text = await self.client.complete(
            model=self.model,
            prompt=build_prompt(text),
            max_output_tokens=self.max_output_tokens,
            reasoning_effort=self.reasoning_effort,
        )
        return parse_response(raw_text, text)


def build_prompt(text: str) -> str:
    """Embed the user's description in the instruction template."""
    return PROMPT_TEMPLATE.format(input=text)


def parse_response(raw_text: str, original_input: str) -> ParsedFood:
    """Validate model output, applying defaults for missing fields."""
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse AI response", extra={"response": raw_text})
        raise ParseError("Failed to parse food information") from exc
    if not isinstance(payload, dict):
        logger.warning("AI response is not an object", extra={"response": raw_text})
        raise ParseError("Failed to parse food information")
    if not payload.get("name"):
        payload["name"] = original_input
    try:
        return ParsedFood.model_validate(payload)
    except PydanticValidationError as exc:
        logger.warning("AI response has invalid fields", extra={"response": raw_text})
        raise ParseError("Failed to parse food information") from exc
