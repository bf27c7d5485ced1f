# Importing the modules registers the built-in sources
from . import advocates_api  # noqa: F401
from . import advocates_file  # noqa: F401
