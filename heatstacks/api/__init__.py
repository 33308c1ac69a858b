# Import the modules for each of the services
from . import orchestration  # noqa: F401
from .core import (  # noqa: F401
    Connection,
    Service,
    ServiceNotSupported,
    UnsupportedAuthType,
    build_query_string,
)
from .pagination import LinkedPage, Page, Pager, PagerExhausted  # noqa: F401
