class ProviderMethodException(Exception):
    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AlertRequestBuilderException(Exception):
    """Raised when an item cannot be turned into a SIGNL4 alert request."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class MissingBinaryPropertyException(AlertRequestBuilderException):
    def __init__(self, property_name: str):
        super().__init__(f"Binary property {property_name} does not exist on input")
        self.property_name = property_name


class UnsupportedAttachmentTypeException(AlertRequestBuilderException):
    def __init__(self, file_extension: str | None, supported_extensions: list[str]):
        super().__init__(
            f"Invalid extension {file_extension}, just {','.join(supported_extensions)} are supported"
        )
        self.file_extension = file_extension
        self.supported_extensions = supported_extensions


class ProviderConfigException(Exception):
    def __init__(self, message, provider_id, *args: object) -> None:
        super().__init__(f"{provider_id}: {message}", *args)
        self.message = message
        self.provider_id = provider_id
