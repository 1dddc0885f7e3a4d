import io

import pytest

from sv39kit.wc import Counts, count, main


@pytest.mark.parametrize(
    "data",
    [b"", b"hello world\nfoo\n", b"  leading and trailing  ", b"a\tb\rc\vd\n\n"],
)
def test_counts_agree_with_bytes(data):
    result = count(io.BytesIO(data))
    assert result == Counts(data.count(b"\n"), len(data.split()), len(data))


def test_nul_separates_words():
    assert count(io.BytesIO(b"a\0b")).words == 2


def test_word_spanning_chunks_counts_once():
    data = b"x" * 1500
    result = count(io.BytesIO(data))
    assert result.words == 1
    assert result.chars == len(data)


def test_main_reports_file(tmp_path, capsys):
    path = tmp_path / "f.txt"
    data = b"one two\nthree\n"
    path.write_bytes(data)
    assert main([str(path)]) == 0
    expected = f"{data.count(b'\n')} {len(data.split())} {len(data)} {path}\n"
    assert capsys.readouterr().out == expected


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "absent"
    assert main([str(missing)]) == 1
    assert capsys.readouterr().out == f"wc: cannot open {missing}\n"