__all__ = ("CacheError", "MalformedResponseError")


class CacheError(Exception): ...


class MalformedResponseError(CacheError): ...
