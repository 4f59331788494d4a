import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def clear_cache():
    """Chaque test part d'un cache des productibles vide."""
    cache.clear()
    yield
    cache.clear()
