import pytest
import yaml

from pbl.core import logger as pbl_log


@pytest.fixture(autouse=True)
def reset_logging():
    pbl_log.close()
    yield
    pbl_log.close()


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "pbl.log"
    pbl_log.init("pbl", str(path))
    return path


@pytest.fixture
def write_script():
    """Write an executable /bin/sh script."""

    def _write(path, body, mode=0o755):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n" + body + "\n")
        path.chmod(mode)
        return path

    return _write


@pytest.fixture
def system(tmp_path, monkeypatch):
    """
    A fake system: sysconfig files, a backend root and a pbl.yml pointing
    at them. PBL_CONFIG is set so that `pbl.cli.main()` picks it up.
    """

    class FakeSystem:
        root = tmp_path
        sysconfig = tmp_path / "sysconfig"
        backend_root = tmp_path / "lib" / "bootloader"
        log = tmp_path / "pbl.log"
        config_file = tmp_path / "pbl.yml"

        def configure(self, loader="grub2", lang=None):
            self.sysconfig.mkdir(exist_ok=True)
            (self.sysconfig / "bootloader").write_text(
                "## Path: System/Bootloader\n"
                f'LOADER_TYPE="{loader}"\n'
                'SECURE_BOOT="yes"\n'
            )
            if lang is not None:
                (self.sysconfig / "language").write_text(f'RC_LANG="{lang}"\n')

        def log_text(self):
            return self.log.read_text() if self.log.exists() else ""

    fake = FakeSystem()
    fake.backend_root.mkdir(parents=True)
    fake.config_file.write_text(yaml.safe_dump({
        'backend_root': str(fake.backend_root),
        'log_file': str(fake.log),
        'settings_sources': {
            'bootloader': str(fake.sysconfig / "bootloader"),
            'language': str(fake.sysconfig / "language"),
        },
    }))
    monkeypatch.setenv("PBL_CONFIG", str(fake.config_file))
    return fake
