"""ContextVar-based configuration for retype.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The lexer and parser read the active config; callers set it once around a
parse instead of threading options through every call.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed.

Usage:
    from retype.config import RetypeConfig, config_context
    from retype.parser import Parser

    with config_context(RetypeConfig(strict=False)):
        doc = Parser(source).parse()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

DEFAULT_BLOCK_KEYWORDS: tuple[str, ...] = ("module", "class", "def", "if")


@dataclass(frozen=True, slots=True)
class RetypeConfig:
    """Immutable lexing and parsing configuration.

    Attributes:
        block_keywords: Keywords that open a block closed by ``end``. Tried in
            order, so a keyword that is a prefix of another must come later.
        modifier_keywords: Subset of block_keywords that only open a block when
            they are the first non-blank text on their line (``x = 1 if y``
            then stays literal text).
        strict: Raise UnbalancedConstructError on unbalanced input instead of
            absorbing stray closers into the surrounding body.
        max_depth: Maximum construct nesting before NestingTooDeepError.

    """

    block_keywords: tuple[str, ...] = DEFAULT_BLOCK_KEYWORDS
    modifier_keywords: frozenset[str] = frozenset()
    strict: bool = True
    max_depth: int = 256

    @classmethod
    def from_dict(cls, config_dict: dict) -> "RetypeConfig":
        """Create RetypeConfig from dictionary.

        Only includes keys that are valid RetypeConfig fields; unknown keys
        are silently ignored. Sequences are normalized to the field types.

        Example:
            >>> config = RetypeConfig.from_dict({"strict": False, "color": "red"})
            >>> config.strict
            False

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "block_keywords" in filtered:
            filtered["block_keywords"] = tuple(filtered["block_keywords"])
        if "modifier_keywords" in filtered:
            filtered["modifier_keywords"] = frozenset(filtered["modifier_keywords"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: RetypeConfig = RetypeConfig()

_config: ContextVar[RetypeConfig] = ContextVar(
    "retype_config",
    default=_DEFAULT_CONFIG,
)


def get_config() -> RetypeConfig:
    """Get the active configuration for this thread/context."""
    return _config.get()


def set_config(config: RetypeConfig) -> None:
    """Set configuration for the current context.

    Only affects the current thread's context. Other threads are unaffected.

    """
    _config.set(config)


def reset_config() -> None:
    """Reset to the default configuration singleton."""
    _config.set(_DEFAULT_CONFIG)


@contextmanager
def config_context(config: RetypeConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with config_context(RetypeConfig(max_depth=8)):
        ...     get_config().max_depth
        8

    """
    previous = _config.get()
    _config.set(config)
    try:
        yield
    finally:
        _config.set(previous)


__all__ = [
    "DEFAULT_BLOCK_KEYWORDS",
    "RetypeConfig",
    "config_context",
    "get_config",
    "reset_config",
    "set_config",
]
