"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macro_tracker.adapters.openai_inference_client import OpenAIInferenceClient
from macro_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from macro_tracker.adapters.supabase_log_repository import SupabaseLogRepository
from macro_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from macro_tracker.config import Settings
from macro_tracker.domain.targets import OtherGenderPolicy
from macro_tracker.services.ledger import LedgerService
from macro_tracker.services.parser import FoodParserService
from macro_tracker.services.profiles import ProfileService
from macro_tracker.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    parser_service: FoodParserService
    ledger_service: LedgerService
    stats_service: StatsService
    profile_service: ProfileService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    log_repository = SupabaseLogRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    inference_client = OpenAIInferenceClient.create(
        api_key=resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
        store=resolved_settings.openai_store,
    )
    parser_service = FoodParserService(
        client=inference_client,
        model=resolved_settings.openai_model,
        max_output_tokens=resolved_settings.openai_max_output_tokens,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
    )
    ledger_service = LedgerService(
        food_repository=food_repository,
        log_repository=log_repository,
    )
    stats_service = StatsService(log_repository)
    profile_service = ProfileService(
        repository=profile_repository,
        other_gender_policy=OtherGenderPolicy(resolved_settings.other_gender_policy),
    )

    async def close_resources() -> None:
        await inference_client.close()

    return AppContainer(
        settings=resolved_settings,
        parser_service=parser_service,
        ledger_service=ledger_service,
        stats_service=stats_service,
        profile_service=profile_service,
        close_resources=close_resources,
    )
