"""Immutable, chainable per-call context carrying a scoped logger.

A :class:`Context` overlays one key/value binding onto its parent.  Lookups
walk from the most specific overlay back to the root, so deriving a child
never touches an ancestor and many children can share one parent.

The logger lives under :data:`LOGGER_KEY`; :func:`bind` / :func:`resolve`
store and fetch it, :func:`named` / :func:`with_fields` derive a context
whose logger is scoped or enriched.  :func:`use_context` additionally makes
a context the ambient "current" one for the running thread or task.
"""

from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Any

from .telemetry.logger import ScopedLogger

LOGGER_KEY = "ctxlog.logger"

_ROOT = object()


@dataclass(frozen=True, eq=False)
class Context:
    """One link of a context chain: a binding of ``key`` to ``val`` on ``parent``.

    The root (background) context has no parent and binds nothing; its key
    is a private placeholder that no lookup matches.
    """

    parent: "Context | None" = None
    key: Hashable = _ROOT
    val: Any = None

    @classmethod
    def background(cls) -> "Context":
        """The empty root context."""
        return _BACKGROUND

    def with_value(self, key: Hashable, value: Any) -> "Context":
        """Derive a child context binding *key* to *value*."""
        return Context(self, key, value)

    def value(self, key: Hashable, default: Any = None) -> Any:
        """Nearest value bound to *key*, or *default* if no ancestor binds it."""
        ctx: Context | None = self
        while ctx is not None:
            if ctx.key is not _ROOT and ctx.key == key:
                return ctx.val
            ctx = ctx.parent
        return default

    def depth(self) -> int:
        """Number of bindings between this context and the root."""
        count = 0
        ctx: Context | None = self
        while ctx is not None:
            if ctx.key is not _ROOT:
                count += 1
            ctx = ctx.parent
        return count

    def __repr__(self) -> str:
        return f"Context(depth={self.depth()})"


_BACKGROUND = Context()


def bind(ctx: Context, logger: ScopedLogger) -> Context:
    """Derive a context whose logger lookups resolve to *logger*."""
    return ctx.with_value(LOGGER_KEY, logger)


def resolve(ctx: Context) -> ScopedLogger:
    """The nearest bound logger, or a discarding one if none is bound."""
    logger = ctx.value(LOGGER_KEY)
    if isinstance(logger, ScopedLogger):
        return logger
    return ScopedLogger.nop()


def named(ctx: Context, segment: str) -> Context:
    """Derive a context whose logger name gains *segment*."""
    return bind(ctx, resolve(ctx).named(segment))


def with_fields(ctx: Context, **fields) -> Context:
    """Derive a context whose logger carries additional *fields*."""
    return bind(ctx, resolve(ctx).with_fields(**fields))


# =============================================================================
# Ambient current context
# =============================================================================


_current_context: ContextVar[Context] = ContextVar(
    "ctxlog_current_context", default=_BACKGROUND
)


def get_current_context() -> Context:
    """The ambient context of the running thread or task (background if unset)."""
    return _current_context.get()


def set_current_context(ctx: Context) -> Token:
    """Make *ctx* the ambient context; returns a token for ``reset_current_context``."""
    return _current_context.set(ctx)


def reset_current_context(token: Token) -> None:
    _current_context.reset(token)


@contextmanager
def use_context(ctx: Context) -> Iterator[Context]:
    """Make *ctx* the ambient context for the duration of the block."""
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


def current_logger() -> ScopedLogger:
    """Shorthand for ``resolve(get_current_context())``."""
    return resolve(_current_context.get())
