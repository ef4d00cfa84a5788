""" Tests for bequiet.quiet.be_quiet_funcall and the related advice functions. """

import sys

import pytest

from bequiet.host import (
    ADVICE_REGISTRY,
    advice_member_p,
    advisable,
    inhibit_message_enabled,
    load,
    message,
    write_region,
)
from bequiet.quiet import (
    be_quiet,
    be_quiet_advice_add,
    be_quiet_advice_remove,
    be_quiet_advised_p,
    be_quiet_funcall,
    set_ignore,
)


@advisable
def chatty(text, file_path=None):
    message("message: %s", text)
    print(f"print: {text}")
    if file_path is not None:
        write_region(text, file_path)
    return text.upper()


class TestBeQuietFuncall:
    """Tests for bequiet.quiet.be_quiet_funcall."""

    def test_output_is_discarded(self, capsys, tmp_path):
        file_path = tmp_path / "output.txt"

        assert "FOO" == be_quiet_funcall(chatty, "foo", file_path=file_path)

        output = capsys.readouterr()
        assert "" == output.out
        assert "" == output.err
        assert "foo" == file_path.read_text(encoding="utf-8")

    def test_message_result(self):
        assert "a-1" == be_quiet_funcall(message, "%s-%d", "a", 1)
        assert be_quiet_funcall(message, None) is None

    def test_output_is_not_captured_by_enclosing_scope(self):
        with be_quiet() as scope:
            print("before")
            be_quiet_funcall(chatty, "inner")
            print("after")
            message("message after")
            captured = scope.current_output()

        assert "before\nafter\nmessage after\n" == captured

    def test_message_without_format(self):
        assert be_quiet_funcall(message) is None

    def test_load(self, capsys, tmp_path):
        file_path = tmp_path / "module.txt"
        file_path.write_text("VALUE = 3\nprint('loaded')\n", encoding="utf-8")

        try:
            assert be_quiet_funcall(load, file_path, module_name="bequiet_test_funcall_load")
            assert 3 == sys.modules["bequiet_test_funcall_load"].VALUE
            assert not be_quiet_funcall(load, tmp_path / "missing.py", noerror=True)
        finally:
            sys.modules.pop("bequiet_test_funcall_load", None)

        output = capsys.readouterr()
        assert "" == output.out
        assert "" == output.err

    def test_primitives_are_restored(self, capsys):
        original_stdout = sys.stdout

        with pytest.raises(ZeroDivisionError):
            be_quiet_funcall(lambda: 1 / 0)

        assert sys.stdout is original_stdout
        assert not inhibit_message_enabled()

        chatty("foo")

        output = capsys.readouterr()
        assert "print: foo\n" == output.out
        assert "message: foo\n" == output.err

    def test_ignore(self, capsys):
        set_ignore(True)

        assert "FOO" == be_quiet_funcall(chatty, "foo")

        output = capsys.readouterr()
        assert "print: foo\n" == output.out
        assert "message: foo\n" == output.err


class TestBeQuietAdvice:
    """Tests for bequiet.quiet.be_quiet_advice_add and bequiet.quiet.be_quiet_advice_remove."""

    def test_add_and_remove(self, capsys):
        be_quiet_advice_add(chatty)
        try:
            assert be_quiet_advised_p(chatty)
            assert advice_member_p(be_quiet_funcall, chatty)
            assert "FOO" == chatty("foo")

            output = capsys.readouterr()
            assert "" == output.out
            assert "" == output.err
        finally:
            be_quiet_advice_remove(chatty)

        assert not be_quiet_advised_p(chatty)
        assert "BAR" == chatty("bar")
        assert "print: bar\n" == capsys.readouterr().out

    def test_add_twice(self):
        be_quiet_advice_add(chatty)
        be_quiet_advice_add(chatty)
        try:
            assert [("around", be_quiet_funcall)] == ADVICE_REGISTRY.layers(chatty)
        finally:
            be_quiet_advice_remove(chatty)

        assert not be_quiet_advised_p(chatty)

    def test_remove_twice(self):
        be_quiet_advice_add(chatty)
        be_quiet_advice_remove(chatty)
        be_quiet_advice_remove(chatty)

        assert not be_quiet_advised_p(chatty)
