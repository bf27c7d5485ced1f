from .advocate import Advocate

__all__ = [
    "Advocate",
]
