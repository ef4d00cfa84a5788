""" Tests for the global switch in bequiet.quiet. """

import pytest

from bequiet.quiet import ignore_enabled, ignoring, set_ignore
from bequiet.quiet._config import _ignore_from_environment


class TestIgnore:
    """Tests for the global switch in bequiet.quiet."""

    def test_set_ignore(self):
        assert not ignore_enabled()

        set_ignore(True)
        assert ignore_enabled()

        set_ignore(False)
        assert not ignore_enabled()

    def test_ignoring(self):
        with ignoring():
            assert ignore_enabled()
            with ignoring(False):
                assert not ignore_enabled()
            assert ignore_enabled()

        assert not ignore_enabled()

    def test_ignoring_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with ignoring():
                raise RuntimeError()

        assert not ignore_enabled()

    @pytest.mark.parametrize(
        "value, expected", [("1", True), ("true", True), (" Yes ", True), ("ON", True), ("0", False), ("", False)]
    )
    def test_environment_variable(self, monkeypatch, value, expected):
        monkeypatch.setenv("BEQUIET_IGNORE", value)

        assert expected == _ignore_from_environment()

    def test_missing_environment_variable(self, monkeypatch):
        monkeypatch.delenv("BEQUIET_IGNORE", raising=False)

        assert not _ignore_from_environment()
