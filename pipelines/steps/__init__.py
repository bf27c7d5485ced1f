# Namespace for pipeline steps
from .fetch_advocates import FetchAdvocates  # noqa: F401
from .load_records import LoadRecordStore  # noqa: F401
