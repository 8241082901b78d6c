import pytest


@pytest.fixture
def write_trace(tmp_path):
    """Writes a trace file from a list of addresses (or raw lines) and returns its path."""
    def _write(entries, name="trace.txt", op="L"):
        lines = [e if isinstance(e, str) else f"{op} {e:x}" for e in entries]
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path
    return _write
