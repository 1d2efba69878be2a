import pytest

from xero_api.keys import read_credential_file


def test_reads_and_strips(tmp_path):
    path = tmp_path / "secret"
    path.write_text("  s3cret\n")
    assert read_credential_file(str(path)) == "s3cret"


def test_empty_path_exits():
    with pytest.raises(SystemExit) as exc_info:
        read_credential_file("")
    assert exc_info.value.code == 1


def test_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        read_credential_file(str(tmp_path / "nope"))
    assert exc_info.value.code == 1
