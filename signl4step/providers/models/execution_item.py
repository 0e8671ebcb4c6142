"""
The records a step is executed on.
"""
import base64
import pathlib
from typing import Optional

from pydantic import BaseModel


class BinaryData(BaseModel):
    """
    A file attached to an item.

    Args:
        data (str): The file content, base64 encoded.
        mime_type (str): The declared mime type, e.g. image/png.
        file_name (Optional[str]): The original file name.
        file_extension (Optional[str]): The file extension without the dot.
    """

    data: str
    mime_type: str = "application/octet-stream"
    file_name: Optional[str] = None
    file_extension: Optional[str] = None

    @property
    def extension(self) -> Optional[str]:
        if self.file_extension:
            return self.file_extension.lstrip(".").lower()
        if self.file_name and pathlib.PurePath(self.file_name).suffix:
            return pathlib.PurePath(self.file_name).suffix.lstrip(".").lower()
        return None

    def content(self) -> bytes:
        return base64.b64decode(self.data)


class ExecutionItem(BaseModel):
    """
    A single input record: its json payload and the files attached to it.
    """

    payload: dict = {}
    binary: dict[str, BinaryData] = {}

    @classmethod
    def from_raw(cls, item: "ExecutionItem | dict") -> "ExecutionItem":
        if isinstance(item, ExecutionItem):
            return item
        # a bare dict without the json/binary envelope is the payload itself
        if not ({"json", "binary"} & set(item.keys())):
            return cls(payload=item)
        return cls(payload=item.get("json") or {}, binary=item.get("binary") or {})

    def get_binary(self, property_name: str) -> Optional[BinaryData]:
        return self.binary.get(property_name)

    def to_context(self) -> dict:
        """
        The item as templates see it: {{ item.json.<key> }} and
        {{ item.binary.<property>.file_name }}.
        """
        # pydantic 2 deprecates .dict()
        dump = getattr(self, "model_dump", None) or self.dict
        data = dump()
        return {"json": data["payload"], "binary": data["binary"]}
