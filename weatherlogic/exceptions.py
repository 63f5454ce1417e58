class WLError(Exception): ...


class StoreError(WLError): ...


class DuplicateRecordError(StoreError): ...


class MonthIndexError(WLError): ...


class IngestError(WLError): ...


class SourceError(IngestError): ...


def require(condition: bool, message: str, exc: type[WLError] = WLError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
