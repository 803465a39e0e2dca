from __future__ import annotations

from infra import version as version_mod


def test_get_app_version_prefers_env_override(monkeypatch, tmp_path):
    version_file = tmp_path / "app_version.txt"
    version_file.write_text("1.0.3", encoding="utf-8")
    monkeypatch.setattr(version_mod, "_VERSION_FILE", version_file)
    monkeypatch.setenv("EVM_APP_VERSION", "9.9.9")

    assert version_mod.get_app_version() == "9.9.9"


def test_get_app_version_reads_runtime_version_file(monkeypatch, tmp_path):
    version_file = tmp_path / "app_version.txt"
    version_file.write_text("1.0.3\n", encoding="utf-8")
    monkeypatch.setattr(version_mod, "_VERSION_FILE", version_file)
    monkeypatch.delenv("EVM_APP_VERSION", raising=False)

    assert version_mod.get_app_version() == "1.0.3"


def test_get_app_version_uses_package_metadata_without_file(monkeypatch, tmp_path):
    monkeypatch.setattr(version_mod, "_VERSION_FILE", tmp_path / "missing.txt")
    monkeypatch.delenv("EVM_APP_VERSION", raising=False)
    monkeypatch.setattr(version_mod.metadata, "version", lambda name: "2.4.0")

    assert version_mod.get_app_version() == "2.4.0"


def test_get_app_version_falls_back_when_nothing_is_available(monkeypatch, tmp_path):
    def _not_installed(name):
        raise version_mod.metadata.PackageNotFoundError(name)

    monkeypatch.setattr(version_mod, "_VERSION_FILE", tmp_path / "missing.txt")
    monkeypatch.delenv("EVM_APP_VERSION", raising=False)
    monkeypatch.setattr(version_mod.metadata, "version", _not_installed)

    assert version_mod.get_app_version() == version_mod._DEFAULT_APP_VERSION
