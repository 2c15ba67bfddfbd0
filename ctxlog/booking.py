"""Request processing that propagates a scoped logger through a Context.

``process`` names its logger ``process`` and tags it with the request id,
``auth`` logs under ``process.auth`` but hands back a context derived from
the one it received (so ``auth`` never leaks into later names, while the
``user_id`` / ``auth`` field it adds does), and ``process_booking`` logs
under ``process.booking`` with every field collected on the way.
"""

from typing import NamedTuple

from .context import Context, named, resolve, with_fields
from .mechanism import AuthorizationFailure

VALID_TOKEN = "valid"
AUTHORIZED_USER_ID = 124
DEFAULT_BOOKING_ID = 9002


class AuthResult(NamedTuple):
    context: Context
    error: AuthorizationFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def auth(ctx: Context, token: str) -> AuthResult:
    """Check *token*; the returned context carries the caller identity."""
    log = resolve(named(ctx, "auth"))
    if token == VALID_TOKEN:
        log.debug("token valid")
        return AuthResult(with_fields(ctx, user_id=AUTHORIZED_USER_ID))
    log.warning("token invalid")
    return AuthResult(with_fields(ctx, auth="anonymous"), AuthorizationFailure())


def process_booking(ctx: Context, booking_id: int) -> None:
    ctx = with_fields(named(ctx, "booking"), booking_id=booking_id)
    resolve(ctx).info("processed")


def process(ctx: Context, request_id: str, token: str) -> AuthResult:
    """Handle one request: authenticate, then book unless auth failed."""
    ctx = with_fields(named(ctx, "process"), request_id=request_id)
    resolve(ctx).info("start")

    result = auth(ctx, token)
    if result.error is not None:
        resolve(ctx).warning("auth failed", error=result.error)
        return result

    process_booking(result.context, DEFAULT_BOOKING_ID)
    return result
