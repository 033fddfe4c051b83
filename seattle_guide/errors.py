"""Exception types shared across the service."""


class ConfigurationError(RuntimeError):
    """A required setting (usually a credential) is missing. Fatal at first use."""


class ToolError(RuntimeError):
    """An external lookup made by a tool failed."""


class CorpusSearchError(ToolError):
    """The corpus service answered with a non-200 status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Fixie API returned status {status_code}: {body}")


class MapsApiError(ToolError):
    """A Google Maps web service call failed. The message never contains the request URL."""

    def __init__(self, api_label: str, reason: str, status_code: int = None):
        self.api_label = api_label
        self.status_code = status_code
        super().__init__(f"google maps {api_label} API failed: {reason}")
