class ServiceError(Exception):
    """Base class for errors raised while building or decoding a service call."""


class UnresolvedPlaceholderError(ServiceError, ValueError):
    def __init__(self, template: str, names: list[str]):
        self.template = template
        self.names = names
        super().__init__(f"unresolved placeholders {names} in {template!r}")


class ResponseDecodeError(ServiceError):
    pass
