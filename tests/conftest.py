"""Shared test fixtures."""

import json
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from macro_tracker.config import Settings
from macro_tracker.containers import AppContainer
from macro_tracker.domain.foods import FoodItem
from macro_tracker.domain.log import LogEntry
from macro_tracker.domain.profile import UserProfile
from macro_tracker.errors import PersistenceError, UpstreamUnavailable, ValidationError
from macro_tracker.services.ledger import FoodRepository, LedgerService, LogRepository
from macro_tracker.services.parser import FoodParserService, InferenceClient
from macro_tracker.services.profiles import ProfileRepository, ProfileService
from macro_tracker.services.stats import StatsService


@dataclass
class FakeInferenceClient(InferenceClient):
    """Fake inference client returning a fixed completion."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "name": "Egg",
            "servings": 2,
            "serving_unit": "1 large egg",
            "calories_per_serving": 78,
            "protein_per_serving": 6,
            "carbs_per_serving": 0.6,
            "fat_per_serving": 5,
        }
    )
    raw_text: str | None = None
    prompts: list[str] = field(default_factory=list)
    reasoning_efforts: list[str | None] = field(default_factory=list)

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        max_output_tokens: int,
        reasoning_effort: str | None = None,
    ) -> str:
        self.prompts.append(prompt)
        self.reasoning_efforts.append(reasoning_effort)
        if self.raw_text is not None:
            return self.raw_text
        return json.dumps(self.payload)


@dataclass
class FailingInferenceClient(InferenceClient):
    """Inference client whose upstream is down."""

    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        max_output_tokens: int,
        reasoning_effort: str | None = None,
    ) -> str:
        raise UpstreamUnavailable("Food parsing service is unavailable")


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food library that enforces the per-user unique name index.

    ``stale_lookups`` makes that many ``find_by_name`` calls miss, the way a
    lookup does when another request inserts the same food right after it.
    """

    foods: dict[UUID, FoodItem] = field(default_factory=dict)
    operations: list[str] = field(default_factory=list)
    fail_lookup: bool = False
    fail_create: bool = False
    stale_lookups: int = 0

    def find_by_name(self, user_id: UUID, name: str) -> FoodItem | None:
        if self.fail_lookup:
            raise PersistenceError("Failed to look up food")
        if self.stale_lookups:
            self.stale_lookups -= 1
            return None
        return self._by_name(user_id, name)

    def create_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        if self.fail_create:
            raise PersistenceError("Failed to create food")
        name = str(payload["name"])
        if self._by_name(user_id, name) is not None:
            return None
        now = datetime.now(tz=UTC)
        food = FoodItem(
            id=uuid4(),
            user_id=user_id,
            name=name,
            serving_unit=str(payload["serving_unit"]),
            calories_per_serving=float(payload["calories_per_serving"]),
            protein_per_serving=float(payload["protein_per_serving"]),
            carbs_per_serving=float(payload["carbs_per_serving"]),
            fat_per_serving=float(payload["fat_per_serving"]),
            times_used=1,
            created_at=now,
            updated_at=now,
        )
        self.foods[food.id] = food
        return food

    def increment_usage(self, food: FoodItem) -> FoodItem:
        updated = replace(self.foods[food.id], times_used=food.times_used + 1)
        self.foods[food.id] = updated
        return updated

    def list_foods(self, user_id: UUID) -> list[FoodItem]:
        foods = [food for food in self.foods.values() if food.user_id == user_id]
        return sorted(foods, key=lambda food: food.times_used, reverse=True)

    def update_food(
        self, food_id: UUID, user_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        current = self._owned(food_id, user_id)
        if current is None:
            return None
        changes = {key: value for key, value in payload.items() if key != "updated_at"}
        clash = self._by_name(user_id, str(changes.get("name", current.name)))
        if clash is not None and clash.id != food_id:
            raise ValidationError("Another food already uses that name")
        updated = replace(current, **changes, updated_at=datetime.now(tz=UTC))
        self.foods[food_id] = updated
        return updated

    def delete_food(self, food_id: UUID, user_id: UUID) -> None:
        self.operations.append(f"delete_food:{food_id}")
        if self._owned(food_id, user_id) is not None:
            self.foods.pop(food_id)

    def _owned(self, food_id: UUID, user_id: UUID) -> FoodItem | None:
        food = self.foods.get(food_id)
        if food is None or food.user_id != user_id:
            return None
        return food

    def _by_name(self, user_id: UUID, name: str) -> FoodItem | None:
        for food in self.foods.values():
            if food.user_id == user_id and food.name.lower() == name.lower():
                return food
        return None


@dataclass
class InMemoryLogRepository(LogRepository):
    """In-memory log repository that joins foods from a food repository."""

    food_repository: InMemoryFoodRepository
    entries: dict[UUID, LogEntry] = field(default_factory=dict)

    def create_entry(
        self, user_id: UUID, food_id: UUID, servings: float, logged_at: date
    ) -> LogEntry:
        entry = LogEntry(
            id=uuid4(),
            user_id=user_id,
            food_library_id=food_id,
            servings=servings,
            logged_at=logged_at,
            created_at=datetime.now(tz=UTC),
        )
        self.entries[entry.id] = entry
        return entry

    def get_entry(self, entry_id: UUID, user_id: UUID) -> LogEntry | None:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return self._join(entry)

    def list_entries(self, user_id: UUID, start: date, end: date) -> list[LogEntry]:
        return [
            self._join(entry)
            for entry in self.entries.values()
            if entry.user_id == user_id and start <= entry.logged_at <= end
        ]

    def update_servings(
        self, entry_id: UUID, user_id: UUID, servings: float
    ) -> LogEntry | None:
        entry = self.get_entry(entry_id, user_id)
        if entry is None:
            return None
        self.entries[entry_id] = replace(self.entries[entry_id], servings=servings)
        return self.get_entry(entry_id, user_id)

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> None:
        if self.get_entry(entry_id, user_id) is not None:
            self.entries.pop(entry_id)

    def delete_entries_for_food(self, food_id: UUID, user_id: UUID) -> None:
        self.food_repository.operations.append(f"delete_entries:{food_id}")
        for entry_id, entry in list(self.entries.items()):
            if entry.food_library_id == food_id and entry.user_id == user_id:
                self.entries.pop(entry_id)

    def _join(self, entry: LogEntry) -> LogEntry:
        food = self.food_repository.foods.get(entry.food_library_id)
        return replace(entry, food=food)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def create_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        profile = UserProfile(id=uuid4(), user_id=user_id, **_profile_fields(payload))
        self.profiles[user_id] = profile
        return profile

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        profile = replace(self.profiles[user_id], **_profile_fields(payload))
        self.profiles[user_id] = profile
        return profile


def _profile_fields(payload: dict[str, object]) -> dict[str, object]:
    fields = dict(payload)
    updated_at = fields.pop("updated_at", None)
    if isinstance(updated_at, str):
        fields["updated_at"] = datetime.fromisoformat(updated_at)
    return fields


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def log_repository(food_repository: InMemoryFoodRepository) -> InMemoryLogRepository:
    return InMemoryLogRepository(food_repository=food_repository)


@pytest.fixture
def inference_client() -> FakeInferenceClient:
    return FakeInferenceClient()


@pytest.fixture
def ledger_service(
    food_repository: InMemoryFoodRepository,
    log_repository: InMemoryLogRepository,
) -> LedgerService:
    return LedgerService(food_repository=food_repository, log_repository=log_repository)


@pytest.fixture
def container(
    settings: Settings,
    inference_client: FakeInferenceClient,
    ledger_service: LedgerService,
    log_repository: InMemoryLogRepository,
) -> AppContainer:
    parser_service = FoodParserService(
        client=inference_client,
        model=settings.openai_model,
        max_output_tokens=settings.openai_max_output_tokens,
        reasoning_effort=settings.openai_reasoning_effort,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        parser_service=parser_service,
        ledger_service=ledger_service,
        stats_service=StatsService(log_repository),
        profile_service=ProfileService(InMemoryProfileRepository()),
        close_resources=close_resources,
    )
