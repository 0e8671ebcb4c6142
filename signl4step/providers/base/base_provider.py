"""
Base class for all providers.
"""

import abc
import logging
import os
import re
from typing import Literal, Optional

from signl4step.contextmanager.contextmanager import ContextManager
from signl4step.core.logging import ProviderLoggerAdapter
from signl4step.providers.models.provider_config import ProviderConfig, ProviderScope
from signl4step.providers.models.provider_method import ProviderMethod


class BaseProvider(metaclass=abc.ABCMeta):
    PROVIDER_SCOPES: list[ProviderScope] = []
    PROVIDER_METHODS: list[ProviderMethod] = []
    PROVIDER_CATEGORY: list[
        Literal[
            "Monitoring",
            "Incident Management",
            "Collaboration",
            "Others",
        ]
    ] = [
        "Others"
    ]  # default category for providers that do not declare one
    PROVIDER_TAGS: list[Literal["alert", "messaging"]] = []

    def __init__(
        self,
        context_manager: ContextManager,
        provider_id: str,
        config: ProviderConfig,
    ):
        """
        Initialize a provider.

        Args:
            context_manager (ContextManager): The execution context.
            provider_id (str): The provider id.
            config (ProviderConfig): The provider configuration.
        """
        self.provider_id = provider_id

        self.config = config
        self.context_manager = context_manager

        base_logger = logging.getLogger(self.provider_id)
        self.logger = ProviderLoggerAdapter(
            base_logger, self, context_manager.tenant_id, provider_id
        )
        base_logger.setLevel(
            os.environ.get(
                "SIGNL4STEP_{}_PROVIDER_LOG_LEVEL".format(self.provider_id.upper()),
                os.environ.get("LOG_LEVEL", "INFO"),
            )
        )

        self.validate_config()
        self.logger.debug(
            "Base provider initialized", extra={"provider": self.__class__.__name__}
        )
        self.provider_type = self._extract_type()
        self.results = []

    def _extract_type(self):
        """
        Extract the provider type from the provider class name.

        Returns:
            str: The provider type.
        """
        name = self.__class__.__name__
        name_without_provider = name.replace("Provider", "")
        name_with_spaces = (
            re.sub("([A-Z])", r" \1", name_without_provider).lower().strip()
        )
        return name_with_spaces.replace(" ", ".")

    @abc.abstractmethod
    def dispose(self):
        """
        Dispose of the provider.
        """
        raise NotImplementedError("dispose() method not implemented")

    @abc.abstractmethod
    def validate_config(self):
        """
        Validate provider configuration.
        """
        raise NotImplementedError("validate_config() method not implemented")

    def validate_scopes(self) -> dict[str, bool | str]:
        """
        Validate provider scopes.

        Returns:
            dict: where key is the scope name and value is whether the scope is valid (True boolean) or string with error message.
        """
        return {}

    def notify(self, **kwargs):
        """
        Output alert message.

        Args:
            **kwargs (dict): The provider context (with statement)
        """
        results = self._notify(**kwargs)
        self.results.append(results)
        return results

    def _notify(self, **kwargs):
        """
        Output alert message.

        Args:
            **kwargs (dict): The provider context (with statement)
        """
        raise NotImplementedError("notify() method not implemented")

    def get_provider_method(self, name: str) -> Optional[ProviderMethod]:
        for method in self.PROVIDER_METHODS:
            if method.func_name == name or method.name == name:
                return method
        return None

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.provider_id})"
