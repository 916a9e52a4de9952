import builtins
import importlib
import importlib.metadata as metadata
import io

import pytest


def test_version_fallback(monkeypatch):
    # Force PackageNotFoundError
    monkeypatch.setattr(metadata, "version", lambda _: (_ for _ in ()).throw(metadata.PackageNotFoundError))

    # Fake pyproject.toml content
    fake_toml = b"[project]\nversion = '0.1.0'\n"
    monkeypatch.setattr(builtins, "open", lambda *_: io.BytesIO(fake_toml))

    # Reload the module so the fallback branch executes
    import metrica
    importlib.reload(metrica)

    assert metrica.__version__ == "0.1.0"


def test_lazy_public_names():
    import metrica
    from metrica.core.quantity import Quantity
    from metrica.units.registry import DEFAULT_REGISTRY

    assert metrica.Quantity is Quantity
    assert metrica.DEFAULT_REGISTRY is DEFAULT_REGISTRY
    assert str(metrica.parse_quantity("3 km")) == "3 km"
    assert metrica.convert_amount(1, "km", "m") == 1000


def test_unit_namespace_from_package():
    import metrica

    assert 2 * metrica.u.hr == metrica.Quantity("7200 s")


def test_errors_are_exported():
    import metrica

    assert issubclass(metrica.UnitParseError, metrica.MetricaError)
    assert issubclass(metrica.IncongruentUnitsError, TypeError)
    with pytest.raises(metrica.UnitParseError):
        metrica.Quantity("3 furlongs")


def test_unknown_attribute():
    import metrica

    with pytest.raises(AttributeError):
        metrica.nope
    assert "Quantity" in dir(metrica)
