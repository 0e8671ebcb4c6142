"""
The providers factory module.
"""

import importlib
import logging

from signl4step.contextmanager.contextmanager import ContextManager
from signl4step.providers.base.base_provider import BaseProvider
from signl4step.providers.models.provider_config import ProviderConfig

logger = logging.getLogger(__name__)


class ProviderConfigurationException(Exception):
    pass


class ProvidersFactory:
    @staticmethod
    def get_provider_class(provider_type: str) -> type[BaseProvider]:
        module = importlib.import_module(
            f"signl4step.providers.{provider_type}_provider.{provider_type}_provider"
        )
        return getattr(module, provider_type.title().replace("_", "") + "Provider")

    @staticmethod
    def get_provider(
        context_manager: ContextManager,
        provider_id: str,
        provider_type: str,
        provider_config: dict,
    ) -> BaseProvider:
        """
        Get the instantiated provider class according to the provider type.

        Args:
            context_manager (ContextManager): The execution context.
            provider_id (str): The provider id.
            provider_type (str): The provider type, e.g. "signl4".
            provider_config (dict): The provider configuration.

        Returns:
            BaseProvider: The provider instance.
        """
        provider_class = ProvidersFactory.get_provider_class(provider_type)
        try:
            provider_config: ProviderConfig = ProviderConfig(**provider_config)
            return provider_class(
                context_manager=context_manager,
                provider_id=provider_id,
                config=provider_config,
            )
        except TypeError as exc:
            logger.error(
                f"Configuration problem while trying to initialize the provider {provider_id}. Probably missing provider config, please check the provider configuration."
            )
            raise ProviderConfigurationException(exc)
