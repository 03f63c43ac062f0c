import pytest

from artifacts.logger import RunLogger


@pytest.fixture
def logger():
    return RunLogger()


@pytest.fixture
def make_file(tmp_path):
    def _make(name: str, data: bytes):
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
        return p
    return _make
