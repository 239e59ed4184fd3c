from __future__ import annotations

from dataclasses import dataclass

from health_log.config import Settings
from health_log.skill.conversation.dispatcher import IntentDispatcher
from health_log.skill.conversation.manager import ConversationManager
from health_log.skill.storage.backends import DynamoDbMetricStore, InMemoryMetricStore, SqliteMetricStore
from health_log.skill.storage.gateway import MetricStore, StorageGateway


@dataclass
class HealthLogSkill:
    """Everything a request needs, built once at start-up and passed in explicitly."""

    gateway: StorageGateway
    manager: ConversationManager
    dispatcher: IntentDispatcher

    @property
    def store_name(self) -> str:
        return self.gateway.store.name


def build_store(settings: Settings) -> MetricStore:
    if settings.store_backend == "sqlite":
        return SqliteMetricStore(settings.sqlite_path)
    if settings.store_backend == "dynamodb":
        return DynamoDbMetricStore.from_table_name(settings.dynamodb_table, settings.dynamodb_region)
    return InMemoryMetricStore()


def build_skill(settings: Settings | None = None, store: MetricStore | None = None) -> HealthLogSkill:
    settings = settings or Settings()
    gateway = StorageGateway(store if store is not None else build_store(settings))
    manager = ConversationManager(gateway=gateway)
    return HealthLogSkill(gateway=gateway, manager=manager, dispatcher=IntentDispatcher(manager))
