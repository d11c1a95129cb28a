"""Tests for small shared utilities."""

from retype.location import SourceLocation
from retype.utils.logger import get_logger


class TestLogger:
    """Tests for logger module."""

    def test_get_logger(self) -> None:
        logger = get_logger("mymodule")
        assert logger.name == "retype.mymodule"

    def test_logger_with_retype_prefix(self) -> None:
        logger = get_logger("retype.parser")
        assert logger.name == "retype.parser"

    def test_logger_name_starting_with_retype_not_submodule(self) -> None:
        """Names starting with 'retype' but not submodules get the prefix."""
        logger = get_logger("retype_other")
        assert logger.name == "retype.retype_other"

    def test_logger_exact_retype_name(self) -> None:
        logger = get_logger("retype")
        assert logger.name == "retype"

    def test_no_handlers_installed(self) -> None:
        assert get_logger("retype.replay").handlers == []


class TestSourceLocation:
    """Tests for SourceLocation formatting."""

    def test_str_with_file(self) -> None:
        assert str(SourceLocation(3, 5, source_file="app.rb")) == "app.rb:3:5"

    def test_str_without_file(self) -> None:
        assert str(SourceLocation(3, 5)) == "3:5"

    def test_unknown(self) -> None:
        loc = SourceLocation.unknown()
        assert (loc.lineno, loc.col_offset) == (0, 0)
