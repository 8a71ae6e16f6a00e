"""Exceptions shared by the codec, the engine and secret creation."""


class DecodeError(ValueError):
    """Raised when text is not valid base32."""


class ConfigurationError(ValueError):
    """Raised for an invalid code length, clock tolerance or secret length."""


def is_int(value: object) -> bool:
    # bool is an int subclass but never a valid length or tolerance
    return isinstance(value, int) and not isinstance(value, bool)
