"""
Bindings for the stacks API of the OpenStack orchestration service.
"""

from .operations import (  # noqa: F401
    abandon,
    adopt,
    create,
    delete,
    get,
    list,
    preview,
    update,
)
from .opts import (  # noqa: F401
    AdoptOpts,
    CreateOpts,
    ListOpts,
    PreviewOpts,
    SortDir,
    SortKey,
    UpdateOpts,
)
from .results import (  # noqa: F401
    AbandonedStack,
    AbandonResult,
    CreatedStack,
    CreateResult,
    DeleteResult,
    GetResult,
    Link,
    ListedStack,
    PreviewedStack,
    PreviewResult,
    RetrievedStack,
    StackPage,
    UpdateResult,
)
