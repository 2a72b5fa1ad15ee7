class ULError(Exception): ...


class IngestError(ULError): ...


class DecodeError(IngestError): ...


class IntervalLabelError(ULError): ...


class ConfigError(ULError): ...


class WorkspaceError(ULError): ...


class UnknownDateError(WorkspaceError): ...


def require(condition: bool, message: str, exc: type[ULError] = ULError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
