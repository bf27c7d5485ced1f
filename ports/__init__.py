from .scheduler import CancelHandle, SchedulerPort
from .search_index import SearchIndexPort, SearchMatch
from .source import AdvocateSourcePort

__all__ = [
    "CancelHandle",
    "SchedulerPort",
    "SearchIndexPort",
    "SearchMatch",
    "AdvocateSourcePort",
]
