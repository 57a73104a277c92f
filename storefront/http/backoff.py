# storefront/http/backoff.py

import random


def backoff_seconds(attempt: int, *, base: float = 0.5, cap: float = 10.0) -> float:
    return min(cap, base * (2 ** attempt) + random.uniform(0.0, 0.5))
