class UriError(Exception):
    """
    Base class for all urikit errors.
    """
    pass


class MalformedUri(UriError, ValueError):
    """
    Exception to throw when text does not follow the URI grammar.
    """
    def __init__(self, message: str, text: str = None) -> None:
        super().__init__(message)
        self.text = text


class InvalidMutation(UriError):
    """
    Exception to throw when a URI component could not be changed.
    """
    pass


class UnsupportedScheme(UriError):
    """
    Exception to throw when a well formed URI has a scheme nobody handles.
    """
    def __init__(self, scheme: str) -> None:
        super().__init__(f"No handler registered for scheme '{scheme}'")
        self.scheme = scheme
