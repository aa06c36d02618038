from __future__ import annotations

from importlib import metadata

from mcdu import version


def test_env_override_wins(monkeypatch):
    monkeypatch.setenv("MCDU_VERSION", " 2.0.0+build7 ")
    assert version.get_version() == "2.0.0+build7"


def test_blank_override_is_ignored(monkeypatch):
    monkeypatch.setenv("MCDU_VERSION", "  ")
    monkeypatch.setattr(version, "_installed_version", lambda: None)
    assert version.get_version() == version.__version__


def test_installed_metadata_before_constant(monkeypatch):
    monkeypatch.setattr(version, "_installed_version", lambda: "0.1.0.post1")
    assert version.get_version() == "0.1.0.post1"


def test_missing_distribution_falls_back(monkeypatch):
    def _missing(name):
        raise metadata.PackageNotFoundError(name)

    monkeypatch.setattr(version.metadata, "version", _missing)
    assert version._installed_version() is None
    assert version.get_version() == version.__version__
