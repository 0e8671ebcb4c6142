"""
Provider configuration model.
"""
import os
from dataclasses import dataclass
from typing import Optional

import chevron
from pydantic import BaseModel


@dataclass
class ProviderConfig:
    """
    Provider configuration model.

    Args:
        authentication (dict): The credentials for the provider.
        name (Optional[str]): The name of the provider instance.
        description (Optional[str]): The description of the provider.
    """

    authentication: Optional[dict]
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        if not self.authentication:
            return
        for key, value in self.authentication.items():
            if (
                isinstance(value, str)
                and value.startswith("{{")
                and value.endswith("}}")
            ):
                self.authentication[key] = chevron.render(value, {"env": os.environ})


class ProviderScope(BaseModel):
    """
    Provider scope model.

    Args:
        name (str): The name of the scope.
        description (Optional[str]): The description of the scope.
        mandatory (bool): Whether the scope is mandatory.
        alias (Optional[str]): Human readable name of the scope.
    """

    name: str
    description: Optional[str] = None
    mandatory: bool = False
    alias: Optional[str] = None
