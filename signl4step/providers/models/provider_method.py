from typing import Optional

from pydantic import BaseModel


class ProviderMethod(BaseModel):
    """
    Provider "special" method model.

    `func_name` is the provider attribute called when the method is triggered.
    """

    name: str
    func_name: str
    scopes: list[str] = []  # required scope names, should match ProviderScope names
    description: Optional[str] = None
