import io

import pytest

from gridmapping.memusage import print_mem_usage, read_mem_usage


def test_read_from_file(tmp_path):
    status = tmp_path / "status"
    status.write_text("Name:\tpython\nVmSize:\t  1000 kB\nVmData:\t   200 kB\nThreads:\t1\n")
    usage = read_mem_usage(str(status))
    assert usage == {"VmSize": "1000", "VmData": "200"}
    assert list(usage) == ["VmSize", "VmData"]


def test_read_ignores_other_fields(tmp_path):
    status = tmp_path / "status"
    status.write_text("Name:\tpython\nVmRSS:\t 50 kB\n")
    assert read_mem_usage(str(status)) == {}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_mem_usage(str(tmp_path / "absent"))


def test_print_matches_read():
    out = io.StringIO()
    print_mem_usage(out)
    expected = "".join(f"#{k}:\t{v}\n" for k, v in read_mem_usage().items())
    assert out.getvalue() == expected