import dataclasses

import pydantic
import requests

from signl4step.contextmanager.contextmanager import ContextManager
from signl4step.core.config import SIGNL4_REQUEST_TIMEOUT, SIGNL4_WEBHOOK_URL
from signl4step.providers.base.base_provider import BaseProvider
from signl4step.providers.base.provider_exceptions import (
    ProviderConfigException,
    ProviderMethodException,
)
from signl4step.providers.models.execution_item import ExecutionItem
from signl4step.providers.models.provider_config import ProviderConfig, ProviderScope
from signl4step.providers.models.provider_method import ProviderMethod
from signl4step.providers.providers_factory import ProvidersFactory
from signl4step.providers.signl4_provider.alert_request import (
    AlertAdditionalFields,
    AlertRequest,
    AlertRequestBuilder,
)


@pydantic.dataclasses.dataclass
class Signl4ProviderAuthConfig:
    team_secret: str = dataclasses.field(
        metadata={
            "required": True,
            "description": "SIGNL4 team or integration secret",
            "sensitive": True,
        },
    )


class Signl4Provider(BaseProvider):
    """Send and resolve SIGNL4 alerts."""

    PROVIDER_DISPLAY_NAME = "SIGNL4"
    PROVIDER_CATEGORY = ["Incident Management"]
    PROVIDER_TAGS = ["alert"]

    PROVIDER_SCOPES = [
        ProviderScope(
            name="signl4:create",
            description="Create SIGNL4 alerts",
            mandatory=True,
            alias="Create alerts",
        ),
    ]
    PROVIDER_METHODS = [
        ProviderMethod(
            name="Send",
            func_name="send_alert",
            scopes=["signl4:create"],
            description="Send an alert",
        ),
        ProviderMethod(
            name="Resolve",
            func_name="resolve_alert",
            scopes=["signl4:create"],
            description="Resolve an alert",
        ),
    ]
    RESOURCES = ["alert"]

    def __init__(
        self, context_manager: ContextManager, provider_id: str, config: ProviderConfig
    ):
        super().__init__(context_manager, provider_id, config)
        self.request_builder = AlertRequestBuilder()

    def validate_config(self):
        try:
            self.authentication_config = Signl4ProviderAuthConfig(
                **(self.config.authentication or {})
            )
        except (TypeError, pydantic.ValidationError) as e:
            raise ProviderConfigException(
                f"Invalid SIGNL4 authentication: {e}", self.provider_id
            ) from e

    def validate_scopes(self):
        scopes = {}
        self.logger.info("Validating scopes")
        try:
            self.send_alert(
                message="Simple alert from signl4step. Please ignore.",
                additional_fields={"title": "Simple test alert"},
            )
            scopes["signl4:create"] = True
        except Exception as e:
            self.logger.exception("Failed to create SIGNL4 alert")
            scopes["signl4:create"] = self._redact(str(e))
        return scopes

    def dispose(self):
        """
        No need to dispose of anything, so just do nothing.
        """
        pass

    @property
    def webhook_url(self) -> str:
        return f"{SIGNL4_WEBHOOK_URL.rstrip('/')}/{self.authentication_config.team_secret}"

    def _notify(
        self,
        resource: str = "alert",
        operation: str = "send",
        item: ExecutionItem | dict | None = None,
        message: str | None = "",
        additional_fields: AlertAdditionalFields | dict | None = None,
        external_id: str | None = None,
        **kwargs: dict,
    ):
        """
        Send or resolve a SIGNL4 alert for a single item.

        Args:
            resource (str): Only "alert" is supported.
            operation (str): "send" or "resolve".
            item (ExecutionItem | dict): The item the step runs on, used for attachments.
            message (str): The alert message ("send").
            additional_fields (dict): Optional alert fields ("send").
            external_id (str): The id of the alert to resolve ("resolve").
        """
        if resource not in self.RESOURCES:
            raise ProviderMethodException(f"Unsupported resource: {resource}")

        if operation == "send":
            return self.send_alert(
                item=item, message=message, additional_fields=additional_fields
            )
        if operation == "resolve":
            return self.resolve_alert(external_id=external_id)
        raise ProviderMethodException(f"Unsupported operation: {operation}")

    def send_alert(
        self,
        item: ExecutionItem | dict | None = None,
        message: str | None = "",
        additional_fields: AlertAdditionalFields | dict | None = None,
    ) -> dict:
        alert_request = self.request_builder.build_send(
            item, message, additional_fields
        )
        body, content_type = alert_request.to_multipart()
        self.logger.info(
            "Sending SIGNL4 alert",
            extra={
                "external_id": alert_request.external_id,
                "has_attachment": alert_request.attachment is not None,
            },
        )
        return self._post(alert_request, data=body, content_type=content_type)

    def resolve_alert(self, external_id: str | None = None) -> dict:
        alert_request = self.request_builder.build_resolve(external_id)
        self.logger.info(
            "Resolving SIGNL4 alert", extra={"external_id": alert_request.external_id}
        )
        return self._post(
            alert_request, json=alert_request.to_json(), content_type="application/json"
        )

    def _redact(self, text: str) -> str:
        team_secret = self.authentication_config.team_secret
        return text.replace(team_secret, "***") if team_secret else text

    def _post(self, alert_request: AlertRequest, content_type: str, **kwargs) -> dict:
        try:
            response = requests.post(
                self.webhook_url,
                headers={"Content-Type": content_type},
                timeout=SIGNL4_REQUEST_TIMEOUT,
                **kwargs,
            )
            if not response.ok:
                self.logger.error(
                    "SIGNL4 request failed",
                    extra={
                        "status_code": response.status_code,
                        "response": response.text,
                        "status": alert_request.status.value,
                    },
                )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            # the webhook url carries the team secret
            raise e.__class__(
                self._redact(str(e)), request=e.request, response=e.response
            ) from None
        self.logger.debug(
            "SIGNL4 request succeeded", extra={"status_code": response.status_code}
        )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"response": response.text}


if __name__ == "__main__":
    # Output debug messages
    import logging

    logging.basicConfig(level=logging.DEBUG, handlers=[logging.StreamHandler()])
    context_manager = ContextManager(
        tenant_id="singletenant",
        workflow_id="test",
    )
    # Load environment variables
    import os

    signl4_team_secret = os.environ.get("SIGNL4_TEAM_SECRET")
    assert signl4_team_secret

    provider_config = {
        "description": "SIGNL4 Provider",
        "authentication": {"team_secret": signl4_team_secret},
    }
    provider = ProvidersFactory.get_provider(
        context_manager=context_manager,
        provider_id="signl4-demo",
        provider_type="signl4",
        provider_config=provider_config,
    )
    result = provider.notify(
        operation="send",
        message="Simple alert showing context with name: John Doe",
        additional_fields={
            "title": "Demo alert",
            "external_id": "signl4step-demo",
            "location": {"latitude": "52.3984", "longitude": "13.0657"},
        },
    )
    print(result)
    print(provider.notify(operation="resolve", external_id="signl4step-demo"))
