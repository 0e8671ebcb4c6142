"""
SIGNL4 alert payloads and the builder that derives them from step items.

SIGNL4 Webhook API: https://connect.signl4.com/webhook/docs/index.html
"""

import base64
import enum
import logging
from typing import Optional, Union

import pydantic
from urllib3 import encode_multipart_formdata
from urllib3.fields import RequestField

from signl4step.core.config import SIGNL4_SOURCE_SYSTEM
from signl4step.providers.base.provider_exceptions import (
    MissingBinaryPropertyException,
    ProviderMethodException,
    UnsupportedAttachmentTypeException,
)
from signl4step.providers.models.execution_item import ExecutionItem

logger = logging.getLogger(__name__)

MULTIPART_BOUNDARY = "----Boundary-cc2050af-c42f-4cda-a0c3-ede7eaa89513"
SUPPORTED_ATTACHMENT_EXTENSIONS = ["png", "jpg", "bmp", "gif", "mp3", "wav"]


class S4Status(str, enum.Enum):
    """
    SIGNL4 alert status.
    """

    NEW = "new"
    RESOLVED = "resolved"


class S4AlertingScenario(str, enum.Enum):
    """
    SIGNL4 alerting scenario.
    """

    SINGLE_ACK = "single_ack"
    MULTI_ACK = "multi_ack"


class S4Location(pydantic.BaseModel):
    latitude: Union[str, int, float]
    longitude: Union[str, int, float]

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"


class AttachmentProperty(pydantic.BaseModel):
    property_name: str = ""


class AlertAdditionalFields(pydantic.BaseModel):
    """
    The optional fields of a "send" operation.
    """

    title: Optional[str] = None
    service: Optional[str] = None
    location: Optional[S4Location] = None
    alerting_scenario: Optional[S4AlertingScenario] = None
    filtering: Optional[bool] = None
    external_id: Optional[str] = None
    attachment: Optional[AttachmentProperty] = None


class AlertAttachment(pydantic.BaseModel):
    file_name: str
    mime_type: str
    data: str  # base64

    def to_request_field(self) -> RequestField:
        field = RequestField(
            name=self.file_name,
            data=self.data,
            filename=self.file_name,
            headers={"Content-Transfer-Encoding": "base64"},
        )
        field.make_multipart(content_type=self.mime_type)
        return field


class AlertRequest(pydantic.BaseModel):
    """
    A single request to the SIGNL4 webhook.

    "send" requests are serialized as multipart/form-data, "resolve"
    requests as a JSON object.
    """

    status: S4Status
    source_system: str = SIGNL4_SOURCE_SYSTEM
    message: Optional[str] = None
    title: Optional[str] = None
    service: Optional[str] = None
    location: Optional[S4Location] = None
    alerting_scenario: Optional[S4AlertingScenario] = None
    filtering: Optional[bool] = None
    external_id: Optional[str] = None
    attachment: Optional[AlertAttachment] = None

    def form_fields(self) -> list[tuple[str, str]]:
        fields = [("message", self.message or "")]
        if self.title:
            fields.append(("title", self.title))
        if self.service:
            fields.append(("X-S4-Service", self.service))
        if self.location:
            fields.append(("X-S4-Location", str(self.location)))
        if self.alerting_scenario:
            fields.append(("X-S4-AlertingScenario", self.alerting_scenario.value))
        # false is SIGNL4's default, only the opt-in is sent
        if self.filtering:
            fields.append(("X-S4-Filtering", "true"))
        if self.external_id:
            fields.append(("X-S4-ExternalID", self.external_id))
        fields.append(("X-S4-Status", self.status.value))
        fields.append(("X-S4-SourceSystem", self.source_system))
        return fields

    def to_multipart(self, boundary: str = MULTIPART_BOUNDARY) -> tuple[bytes, str]:
        """
        Encode the request as multipart/form-data.

        Returns:
            tuple[bytes, str]: The body and the matching content type header.
        """
        fields: list = list(self.form_fields())
        if self.attachment:
            fields.append(self.attachment.to_request_field())
        return encode_multipart_formdata(fields, boundary=boundary)

    def to_json(self) -> dict:
        return {
            "X-S4-ExternalID": self.external_id,
            "X-S4-Status": self.status.value,
            "X-S4-SourceSystem": self.source_system,
        }


class AlertRequestBuilder:
    """Builds one AlertRequest per step item."""

    def __init__(self, source_system: str = SIGNL4_SOURCE_SYSTEM):
        self.source_system = source_system

    def build_send(
        self,
        item: ExecutionItem | dict | None,
        message: str | None = "",
        additional_fields: AlertAdditionalFields | dict | None = None,
    ) -> AlertRequest:
        if not isinstance(additional_fields, AlertAdditionalFields):
            # templates render missing keys as "", which means not set
            additional_fields = AlertAdditionalFields(
                **{
                    key: value
                    for key, value in (additional_fields or {}).items()
                    if value != ""
                }
            )
        item = ExecutionItem.from_raw(item or {})

        attachment = None
        if additional_fields.attachment and additional_fields.attachment.property_name:
            attachment = self._build_attachment(
                item, additional_fields.attachment.property_name
            )

        return AlertRequest(
            status=S4Status.NEW,
            source_system=self.source_system,
            message=message or "",
            title=additional_fields.title,
            service=additional_fields.service,
            location=additional_fields.location,
            alerting_scenario=additional_fields.alerting_scenario,
            filtering=additional_fields.filtering,
            external_id=additional_fields.external_id,
            attachment=attachment,
        )

    def build_resolve(self, external_id: str | None) -> AlertRequest:
        if not external_id:
            raise ProviderMethodException(
                "external_id is required to resolve a SIGNL4 alert"
            )
        return AlertRequest(
            status=S4Status.RESOLVED,
            source_system=self.source_system,
            external_id=external_id,
        )

    @staticmethod
    def _build_attachment(item: ExecutionItem, property_name: str) -> AlertAttachment:
        binary = item.get_binary(property_name)
        if binary is None:
            raise MissingBinaryPropertyException(property_name)

        if binary.extension not in SUPPORTED_ATTACHMENT_EXTENSIONS:
            raise UnsupportedAttachmentTypeException(
                binary.extension, SUPPORTED_ATTACHMENT_EXTENSIONS
            )

        file_name = binary.file_name or f"{property_name}.{binary.extension}"
        logger.debug(
            "Attaching binary property",
            extra={"property_name": property_name, "file_name": file_name},
        )
        return AlertAttachment(
            file_name=file_name,
            mime_type=binary.mime_type,
            data=base64.b64encode(binary.content()).decode(),
        )
