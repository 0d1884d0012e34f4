"""Rerouter — rule-driven HTTP redirects for ASGI.

Maps legacy hosts and paths to canonical URLs with 301/302 redirects,
and passes everything else through untouched.

Basic usage::

    from rerouter import App, AppConfig

    app = App(AppConfig(rule_files=("rules/mappings.yaml", "rules/site.yaml")))

Without HTTP::

    from rerouter import RequestTarget, RewriteChain

    chain = RewriteChain.from_files(["rules/mappings.yaml", "rules/site.yaml"])
    result = chain.evaluate(RequestTarget.from_url("http://www.springsource.org/sts/welcome"))
"""

__version__ = "0.1.0"
__all__ = [
    "PASS_THROUGH",
    "App",
    "AppConfig",
    "ConfigError",
    "HTTPError",
    "Middleware",
    "Next",
    "NotFound",
    "PassThrough",
    "Redirect",
    "RedirectStatus",
    "RequestTarget",
    "Request",
    "RerouterError",
    "Response",
    "RewriteChain",
    "RewriteEngine",
    "RewriteMiddleware",
    "Rule",
    "RuleSet",
    "load_rules",
    "parse_rules",
]

_REWRITE_NAMES = frozenset(
    {
        "PASS_THROUGH",
        "PassThrough",
        "Redirect",
        "RedirectStatus",
        "RequestTarget",
        "RewriteChain",
        "RewriteEngine",
        "Rule",
        "RuleSet",
        "load_rules",
        "parse_rules",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import rerouter`` fast while providing a clean top-level API.
    """
    if name == "App":
        from rerouter.app import App

        return App

    if name == "AppConfig":
        from rerouter.config import AppConfig

        return AppConfig

    if name == "Request":
        from rerouter.http.request import Request

        return Request

    if name == "Response":
        from rerouter.http.response import Response

        return Response

    if name in ("Middleware", "Next", "RewriteMiddleware"):
        import rerouter.middleware as middleware

        return getattr(middleware, name)

    if name in ("RerouterError", "ConfigError", "HTTPError", "NotFound"):
        import rerouter.errors as errors

        return getattr(errors, name)

    if name in _REWRITE_NAMES:
        import rerouter.rewrite as rewrite

        return getattr(rewrite, name)

    raise AttributeError(f"module 'rerouter' has no attribute {name!r}")
