import pytest

from sv39kit.params import OpenFlag
from sv39kit.sh import (
    BackCmd,
    ExecCmd,
    ListCmd,
    PipeCmd,
    RedirCmd,
    ShellSyntaxError,
    parse_command,
    tokenize,
)


def test_tokenize_kinds():
    assert list(tokenize("a>>b|c")) == [
        ("a", "a"),
        ("+", ">>"),
        ("a", "b"),
        ("|", "|"),
        ("a", "c"),
    ]


def test_tokenize_symbols_and_space():
    kinds = [k for k, _ in tokenize("  ( x ; y ) & < > ")]
    assert kinds == ["(", "a", ";", "a", ")", "&", "<", ">"]


def test_tokenize_empty():
    assert list(tokenize(" \t\n")) == []


def test_simple_exec():
    assert parse_command("echo hi there\n") == ExecCmd(["echo", "hi", "there"])


def test_empty_line_is_empty_exec():
    assert parse_command("") == ExecCmd([])


def test_redirections_nest_in_order():
    cmd = parse_command("cat < in > out")
    assert cmd == RedirCmd(
        RedirCmd(ExecCmd(["cat"]), "in", OpenFlag.RDONLY, 0),
        "out",
        OpenFlag.WRONLY | OpenFlag.CREATE | OpenFlag.TRUNC,
        1,
    )


def test_append_redirection():
    cmd = parse_command("echo x >> log")
    assert cmd == RedirCmd(ExecCmd(["echo", "x"]), "log", OpenFlag.WRONLY | OpenFlag.CREATE, 1)


def test_pipe_is_right_associative():
    cmd = parse_command("a | b | c")
    assert cmd == PipeCmd(ExecCmd(["a"]), PipeCmd(ExecCmd(["b"]), ExecCmd(["c"])))


def test_list_and_background():
    cmd = parse_command("a & ; b")
    assert cmd == ListCmd(BackCmd(ExecCmd(["a"])), ExecCmd(["b"]))


def test_block_with_redirection():
    cmd = parse_command("(a ; b) > f")
    assert isinstance(cmd, RedirCmd)
    assert cmd.file == "f"
    assert cmd.cmd == ListCmd(ExecCmd(["a"]), ExecCmd(["b"]))


def test_leftovers_are_rejected():
    with pytest.raises(ShellSyntaxError) as info:
        parse_command("a )")
    assert info.value.leftover == ")"


def test_missing_close_paren():
    with pytest.raises(ShellSyntaxError, match="missing"):
        parse_command("( a")


def test_missing_redirection_file():
    with pytest.raises(ShellSyntaxError, match="missing file for redirection"):
        parse_command("a >")


def test_too_many_args():
    assert parse_command(" ".join("x" * 9)) == ExecCmd(["x"] * 9)
    with pytest.raises(ShellSyntaxError, match="too many args"):
        parse_command(" ".join("x" * 10))


def test_paren_in_middle_is_syntax_error():
    with pytest.raises(ShellSyntaxError, match="syntax"):
        parse_command("a (")