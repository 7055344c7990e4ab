class GatewayError(Exception):
    """Base class for failures while asking the model for a plan."""


class ResponseTypeError(GatewayError):
    """The completion endpoint did not return a single text part."""


class ParseError(GatewayError):
    """The model's text could not be read as a workout plan."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class TransportError(GatewayError):
    """The request to the completion endpoint failed on the network or HTTP level."""
