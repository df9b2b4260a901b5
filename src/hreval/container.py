"""Dependency injection container for the evaluation engine."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import ApiPayloadAdapter, InMemoryEvaluationStore
from .core import (
    EvaluationEngine,
    GeneratorConfig,
    RecordGenerator,
    ReviewerDirectory,
    TransitionPolicy,
)
from .service import EvaluationService


class EvaluationContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    reviewer_directory = providers.Singleton(
        ReviewerDirectory,
        reviewers=config.reviewers,
    )

    record_generator = providers.Singleton(
        RecordGenerator,
        directory=reviewer_directory,
    )

    transition_policy = providers.Singleton(TransitionPolicy)

    engine = providers.Singleton(
        EvaluationEngine,
        directory=reviewer_directory,
        generator=record_generator,
        policy=transition_policy,
    )

    store = providers.Singleton(InMemoryEvaluationStore)

    payload_adapter = providers.Singleton(ApiPayloadAdapter)

    service = providers.Factory(
        EvaluationService,
        engine=engine,
        store=store,
    )


def create_container(*, settings: dict | None = None) -> EvaluationContainer:
    """Instantiate container with optional overrides."""

    container = EvaluationContainer()

    if not settings:
        return container

    reviewers = settings.get("reviewers") if isinstance(settings, dict) else None
    if reviewers:
        container.config.from_dict({"reviewers": list(reviewers)})

    generator_settings = settings.get("generator", {}) if isinstance(settings, dict) else {}
    if generator_settings:
        generator_config = GeneratorConfig(**generator_settings)
        container.record_generator.override(
            providers.Singleton(
                RecordGenerator,
                directory=container.reviewer_directory,
                config=generator_config,
            )
        )

    return container
