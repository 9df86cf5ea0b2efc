"""
Storefront Backend — Protected Route Gate
===========================================

What:  Ordered chain of checks every protected request must pass before its
       handler runs: API key → bearer token → rate limit.
Why:   Keeps authentication and throttling out of the handlers; a handler
       only ever sees requests that are authenticated and admitted.
How:   Each stage is a callable (RequestContext) -> GateOutcome. GatePipeline
       runs them in order and stops at the first rejection. Protected
       routers attach the pipeline through the `require_gate` dependency;
       /health and /login don't, so they bypass it entirely.
Who:   Built once per application in create_app() (app.state.gate).

Stage Order:
    Request → [API key] → [JWT] → [Rate limit] → Handler
                 │           │          │
                401         401        403

    The order matters: a request with a valid key but no token is rejected
    by the JWT stage and never reaches the rate-limit stage, so it does not
    consume a slot in the window.

Side effects:
    Only the rate-limit stage mutates shared state (the RateLimiter).
    The API-key and JWT stages are synchronous and read configuration only;
    they record what they validated on the per-request AuthContext.
"""

import dataclasses
import hmac
import inspect
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

from starlette.requests import Request

from storefront.config import Settings
from storefront.exceptions import RateLimitExceededError, StorefrontError, UnauthorizedError
from storefront.middleware.rate_limit import RateLimiter
from storefront.middleware.request_id import request_id_var
from storefront.schemas.auth import TokenClaims
from storefront.services.token_service import TokenService

logger = logging.getLogger(__name__)

RATE_LIMIT_WINDOW_SECONDS = 60
API_KEY_HEADER = "x-api-key"
BEARER_PREFIX = "Bearer "


# ══════════════════════════════════════════════════════════════════════════
# Request-scoped Context
# ══════════════════════════════════════════════════════════════════════════

@dataclass
class AuthContext:
    """What the gate validated for this request. Never persisted."""
    api_key: Optional[str] = None
    claims: Optional[TokenClaims] = None

    @property
    def subject(self) -> Optional[str]:
        return self.claims.sub if self.claims else None


@dataclass
class RequestContext:
    """
    Framework-independent view of the request the stages inspect.

    Header names are stored lower-cased; use header() for lookups.
    """
    method: str
    path: str
    headers: Mapping[str, str]
    auth: AuthContext = field(default_factory=AuthContext)

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        # Repeated headers: the first value wins, as with request.headers.get()
        headers: Dict[str, str] = {}
        for key, value in request.headers.items():
            headers.setdefault(key.lower(), value)
        return cls(method=request.method, path=request.url.path, headers=headers)

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())


@dataclass(frozen=True)
class GateOutcome:
    """Pass-through (error is None) or a terminal rejection."""
    error: Optional[StorefrontError] = None
    stage: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.error is None

    @classmethod
    def proceed(cls) -> "GateOutcome":
        return cls()

    @classmethod
    def reject(cls, error: StorefrontError) -> "GateOutcome":
        return cls(error=error)


GateStage = Callable[[RequestContext], Union[GateOutcome, Awaitable[GateOutcome]]]


# ══════════════════════════════════════════════════════════════════════════
# Stages
# ══════════════════════════════════════════════════════════════════════════

def _constant_time_equals(supplied: str, expected: str) -> bool:
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


class ApiKeyStage:
    """
    Requires `x-api-key` to equal the configured key exactly.

    An unconfigured (empty) key rejects every request rather than accepting
    an empty header.
    """

    name = "api_key"

    def __init__(self, expected_key: str):
        self._expected_key = expected_key

    def __call__(self, ctx: RequestContext) -> GateOutcome:
        supplied = ctx.header(API_KEY_HEADER)
        if supplied is None:
            return GateOutcome.reject(UnauthorizedError(reason="missing_api_key"))
        if not self._expected_key or not _constant_time_equals(supplied, self._expected_key):
            return GateOutcome.reject(UnauthorizedError(reason="invalid_api_key"))

        ctx.auth.api_key = supplied
        return GateOutcome.proceed()


class JwtStage:
    """
    Requires `Authorization: Bearer <token>` with a token the TokenService accepts.

    The prefix match is exact ("Bearer" + one space, case-sensitive).
    """

    name = "jwt"

    def __init__(self, token_service: TokenService):
        self._token_service = token_service

    def __call__(self, ctx: RequestContext) -> GateOutcome:
        header = ctx.header("authorization")
        if header is None or not header.startswith(BEARER_PREFIX):
            return GateOutcome.reject(UnauthorizedError(reason="missing_bearer_token"))

        token = header[len(BEARER_PREFIX):]
        try:
            claims = self._token_service.verify(token)
        except UnauthorizedError as e:
            return GateOutcome.reject(e)

        ctx.auth.claims = claims
        return GateOutcome.proceed()


class RateLimitStage:
    """
    Admits the request if the shared fixed window has room.

    The limiter's lock is taken for the single check_and_increment call and
    released before the handler runs.
    """

    name = "rate_limit"

    def __init__(
        self,
        limiter: RateLimiter,
        limit: int,
        window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
    ):
        self._limiter = limiter
        self._limit = limit
        self._window_seconds = window_seconds

    async def __call__(self, ctx: RequestContext) -> GateOutcome:
        if await self._limiter.check_and_increment(self._limit, self._window_seconds):
            return GateOutcome.proceed()

        retry_after = await self._limiter.retry_after(self._window_seconds)
        return GateOutcome.reject(
            RateLimitExceededError(
                retry_after=retry_after,
                context={"limit": self._limit, "window_seconds": self._window_seconds},
            )
        )


# ══════════════════════════════════════════════════════════════════════════
# Pipeline
# ══════════════════════════════════════════════════════════════════════════

def _stage_name(stage: GateStage) -> str:
    return getattr(stage, "name", None) or getattr(stage, "__name__", type(stage).__name__)


class GatePipeline:
    """
    Runs stages in order; the first rejection ends the run.

    Stages may be plain or async callables. Outcomes are never combined:
    the caller gets either a single pass-through or the first rejection,
    tagged with the name of the stage that produced it.
    """

    def __init__(self, stages: Sequence[GateStage]):
        self._stages: Tuple[GateStage, ...] = tuple(stages)

    @property
    def stages(self) -> Tuple[GateStage, ...]:
        return self._stages

    async def run(self, ctx: RequestContext) -> GateOutcome:
        for stage in self._stages:
            outcome = stage(ctx)
            if inspect.isawaitable(outcome):
                outcome = await outcome

            if not outcome.allowed:
                name = _stage_name(stage)
                logger.warning(
                    "[%s] Gate rejected %s %s at %s stage (%s)",
                    request_id_var.get(""),
                    ctx.method,
                    ctx.path,
                    name,
                    outcome.error.context.get("reason", type(outcome.error).__name__),
                )
                return dataclasses.replace(outcome, stage=name)

        return GateOutcome.proceed()


def build_protected_gate(
    app_settings: Settings,
    limiter: RateLimiter,
    token_service: TokenService,
) -> GatePipeline:
    """Assemble the fixed API key → JWT → rate limit chain for protected routes."""
    return GatePipeline(
        [
            ApiKeyStage(app_settings.api_key),
            JwtStage(token_service),
            RateLimitStage(limiter, limit=app_settings.rate_limit_per_minute),
        ]
    )


# ══════════════════════════════════════════════════════════════════════════
# FastAPI Dependency
# ══════════════════════════════════════════════════════════════════════════

async def require_gate(request: Request) -> AuthContext:
    """
    Dependency attached to protected routers.

    Raises the rejecting stage's error (handled globally as 401/403);
    on success stores the AuthContext on request.state.auth.
    """
    pipeline: GatePipeline = request.app.state.gate
    ctx = RequestContext.from_request(request)
    outcome = await pipeline.run(ctx)
    if not outcome.allowed:
        raise outcome.error

    request.state.auth = ctx.auth
    return ctx.auth
