"""Dependency injection wiring for the chat backend."""
from __future__ import annotations

from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.resources import DatabaseResource


class InfrastructureContainer(containers.DeclarativeContainer):
    """Process-wide resources built from ``SETTINGS``."""

    database = providers.Resource(
        DatabaseResource,
        database_url=str(SETTINGS.DATABASE.DATABASE_URL),
        pool_size=SETTINGS.DATABASE.POOL_SIZE,
        statement_timeout_ms=SETTINGS.DATABASE.STATEMENT_TIMEOUT_MS,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Account and message services. Sessions are passed per call, not injected."""

    # Holds no per-request state
    credential_service = providers.Singleton(
        "api.features.users.credentials.CredentialService",
        rounds=SETTINGS.AUTH.BCRYPT_ROUNDS,
        salt_bytes=SETTINGS.AUTH.SALT_BYTES,
    )

    user_service = providers.Factory(
        "api.features.users.service.UserService",
        credentials=credential_service,
    )

    message_service = providers.Factory(
        "api.features.messages.service.MessageService",
        message_settings=SETTINGS.MESSAGES,
    )


class ControllerContainer(containers.DeclarativeContainer):
    services = providers.DependenciesContainer()

    user_controller = providers.Factory(
        "api.features.users.controller.UserController",
        user_service=services.user_service,
    )

    message_controller = providers.Factory(
        "api.features.messages.controller.MessageController",
        message_service=services.message_service,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root container; FastAPI routers are wired against it."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "api.main",
            "api.shared.db",
            "api.features.users.router",
            "api.features.messages.router",
        ]
    )

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer)
    controllers = providers.Container(ControllerContainer, services=services)
