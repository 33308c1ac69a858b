from . import stacks  # noqa: F401
from .api import Connection, Pager  # noqa: F401
from .config import connect  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    DecodeError,
    Error,
    TransportError,
    UnexpectedStatusError,
    ValidationError,
)
