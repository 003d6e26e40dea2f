"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Apply :class:`werkzeug.middleware.proxy_fix.ProxyFix` when enabled.

    The client address feeds the per-address auth rate limit and the audit
    columns of issued refresh tokens, so it must reflect the real caller.

    Parameters
    ----------
    app: flask.Flask
        Application whose WSGI pipeline should respect upstream proxy headers.

    Notes
    -----
    Controlled by ``USE_PROXYFIX`` (defaults to ``True``) and
    ``PROXY_FIX_HOPS``, the number of trusted proxies in front of the app.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = max(int(app.config.get("PROXY_FIX_HOPS", 1)), 1)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops)
