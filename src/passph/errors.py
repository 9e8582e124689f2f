"""Error types shared across passph.

Hierarchy:
- PassphError: base for everything raised by this package
- InvalidArgument: malformed or out-of-range input
- NotFound: no stored value, or an id outside the catalog
- TransportFailure: Redis or wordlist source unreachable / unreadable
- Unusable: wordlist resolved but holds no words
- InvalidConfig: a passphrase cannot be generated from the given config
"""


class PassphError(Exception):
    """Base class for passph errors."""

    pass


class InvalidArgument(PassphError):
    """Raised when an argument is malformed or out of range."""

    pass


class NumberOfWordsLessThanZero(InvalidArgument):
    """Raised when the requested number of words is not a positive integer."""

    pass


class NumberOfWordsTooBig(InvalidArgument):
    """Raised when the requested number of words exceeds the limit."""

    pass


class SeparatorTooLong(InvalidArgument):
    """Raised when the requested separator is too many bytes long."""

    pass


class NotFound(PassphError):
    """Raised when a value is absent."""

    pass


class TransportFailure(PassphError):
    """Raised when a backend or remote source cannot be reached or read."""

    pass


class Unusable(PassphError):
    """Raised when a wordlist has no words."""

    pass


class InvalidConfig(PassphError):
    """Raised when a passphrase config does not point to a usable wordlist."""

    pass
