import importlib
import importlib.metadata as metadata
import builtins
import io

def test_version_fallback(monkeypatch):
    # Force PackageNotFoundError
    monkeypatch.setattr(metadata, "version", lambda _: (_ for _ in ()).throw(metadata.PackageNotFoundError))

    # Fake pyproject.toml content
    fake_toml = b"[project]\nversion = '9.9.9'\n"
    monkeypatch.setattr(builtins, "open", lambda *_: io.BytesIO(fake_toml))

    # Reload the module so the fallback branch executes
    import symunits
    importlib.reload(symunits)

    assert symunits.__version__ == "9.9.9"


def test_version_from_metadata(monkeypatch):
    monkeypatch.setattr(metadata, "version", lambda _: "1.2.3")

    import symunits
    importlib.reload(symunits)

    assert symunits.__version__ == "1.2.3"


def test_lazy_namespace_attribute():
    import symunits
    from symunits.units.labels import DEFAULT_NAMESPACE

    assert symunits.u is DEFAULT_NAMESPACE
    assert "u" in dir(symunits)
