import pytest


@pytest.fixture
def write_file(tmp_path):
    """ Write bytes to a file under tmp_path and return its path """
    def _write(content: bytes, name: str = "test.log"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return _write
