"""Rerouter application class.

Mutable during setup (rule sources, middleware, fallback handler).
Frozen at runtime when the lifespan starts or ``__call__()`` is first
invoked. Rule files are parsed during the freeze, so a bad rule file
aborts startup instead of failing on some later request.
"""

import inspect
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeAlias

from rerouter._internal.asgi import Receive, Scope, Send
from rerouter.config import AppConfig
from rerouter.errors import ConfigError
from rerouter.http.request import Request
from rerouter.http.response import Response
from rerouter.middleware.protocol import Middleware
from rerouter.middleware.rewrite import RewriteMiddleware
from rerouter.rewrite.chain import RewriteChain
from rerouter.rewrite.engine import MatchResult, RewriteEngine
from rerouter.rewrite.loader import load_rules
from rerouter.rewrite.rule import RequestTarget
from rerouter.rewrite.ruleset import RuleSet
from rerouter.server.handler import Fallback, handle_request

# What add_rules() accepts
RuleSource: TypeAlias = RuleSet | RewriteEngine | str | Path


def _pass_through(request: Request) -> Response:  # noqa: ARG001
    return Response()


class App:
    """The rerouter application.

    Rule sources are consulted in the order they were added, after any
    ``AppConfig.rule_files``; the first source that redirects wins.
    Requests nobody redirects go to the fallback handler (an empty 200
    by default)::

        app = App(AppConfig(rule_files=("rules/mappings.yaml",)))
        app.add_rules("rules/site.yaml")

        @app.fallback
        async def upstream(request: Request) -> Response:
            ...

    Thread safety:
        The setup phase is single-threaded. The freeze transition uses a
        Lock + double-check so exactly one thread loads the rules, even
        when several ASGI workers receive their first request at once.
    """

    __slots__ = (
        "_chain",
        "_fallback",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_rule_sources",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._rule_sources: list[RuleSource] = list(self.config.rule_files)
        self._middleware_list: list[Middleware] = []
        self._fallback: Fallback = _pass_through
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._chain: RewriteChain | None = None
        self._middleware: tuple[Middleware, ...] = ()

    # -- Setup --

    def add_rules(self, source: RuleSource) -> None:
        """Add a rule source after the ones already registered.

        *source* is a ``RuleSet``, a ``RewriteEngine``, or the path of a
        YAML rule file (loaded when the app freezes).
        """
        self._check_not_frozen()
        self._rule_sources.append(source)

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware. Runs before the rewrite middleware."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def fallback(self, func: Fallback) -> Fallback:
        """Register the handler that receives pass-through requests.

        Usage::

            @app.fallback
            def not_redirected(request: Request) -> Response:
                return Response("served by the origin")
        """
        self._check_not_frozen()
        self._fallback = func
        return func

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run at lifespan startup, after the rules load."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook run at lifespan shutdown."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Runtime --

    @property
    def chain(self) -> RewriteChain:
        """The compiled rewrite chain (freezes the app on first access)."""
        self._ensure_frozen()
        assert self._chain is not None
        return self._chain

    def evaluate(self, host: str | None, path: str, query: str = "") -> MatchResult:
        """Evaluate a host and path against the app's rules without HTTP."""
        return self.chain.evaluate(RequestTarget(host, path, query))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            middleware=self._middleware,
            fallback=self._fallback,
            trust_forwarded_host=self.config.trust_forwarded_host,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,  # noqa: ARG002
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, so a ConfigError is reported as
        ``lifespan.startup.failed`` and the server refuses to start.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    for hook in self._startup_hooks:
                        result = hook()
                        if inspect.isawaitable(result):
                            await result
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    result = hook()
                    if inspect.isawaitable(result):
                        await result
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Load rules and compile the middleware pipeline.

        MUST only be called while holding _freeze_lock.

        Raises:
            ConfigError: If any rule source is invalid. The app stays
                unfrozen so the error repeats rather than serving
                without rules.
        """
        engines: list[RewriteEngine] = []
        for source in self._rule_sources:
            if isinstance(source, RewriteEngine):
                engines.append(source)
            elif isinstance(source, RuleSet):
                engines.append(RewriteEngine(source))
            elif isinstance(source, (str, Path)):
                engines.append(RewriteEngine(load_rules(source)))
            else:
                msg = f"Unsupported rule source {source!r}"
                raise ConfigError(msg)

        chain = RewriteChain(engines)
        rewrite = RewriteMiddleware(chain, debug=self.config.debug)

        self._chain = chain
        self._middleware = (*self._middleware_list, rewrite)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Add rules, middleware, and hooks before the first request."
            )
            raise RuntimeError(msg)
