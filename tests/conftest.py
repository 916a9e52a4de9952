# tests/conftest.py
import pytest

from metrica.units.registry import DEFAULT_REGISTRY as _ureg
from metrica.units.registry import bootstrap_registry


@pytest.fixture(scope="session")
def ureg():
    return _ureg


@pytest.fixture
def fresh_registry():
    """A private registry built from the catalog, safe to mutate."""
    return bootstrap_registry()
