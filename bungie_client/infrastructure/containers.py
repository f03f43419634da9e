"""
Dependency Injection container for the bungie_client package.

This container uses the `dependency-injector` library to wire the configured
BungieClient from the Dynaconf settings object.
"""

from dependency_injector import containers, providers

from ..settings import settings

from .api_client import BungieClient
from .client_builder import BungieClientBuilder


def create_client(config) -> BungieClient:
    """
    Builds a client from a settings mapping.

    Args:
        config: Anything with a ``get`` method, e.g. the Dynaconf settings.

    Raises:
        ConfigurationError: If ``api_key`` is not configured.
    """

    builder = BungieClientBuilder().with_api_key(config.get("api_key"))

    if config.get("user_agent"):
        builder.with_user_agent(config.get("user_agent"))
    if config.get("oauth_client_id"):
        builder.with_oauth_client_id(config.get("oauth_client_id"))
    if config.get("oauth_client_secret"):
        builder.with_oauth_client_secret(config.get("oauth_client_secret"))

    return builder.build()


class Container(containers.DeclarativeContainer):
    """DI container for wiring the client components."""

    config = providers.Object(settings)

    bungie_client: providers.Singleton[BungieClient] = providers.Singleton(
        create_client,
        config=config,
    )
