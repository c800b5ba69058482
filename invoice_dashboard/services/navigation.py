"""
Navigation signal for form handlers.

A handler that finishes by sending the browser elsewhere calls redirect(),
which raises Redirect and so ends the handler. The FastAPI app turns the
signal into a 303 See Other response (see main.py).
"""

from typing import Dict, NoReturn, Optional


class Redirect(Exception):
    """
    Raised to abort the current handler and navigate the client.

    Attributes:
        path: Target path for the Location header
        cookies: Cookies to set on the redirect response
    """

    def __init__(self, path: str, cookies: Optional[Dict[str, str]] = None) -> None:
        super().__init__(f"Redirect to {path}")
        self.path = path
        self.cookies = dict(cookies or {})


def redirect(path: str, cookies: Optional[Dict[str, str]] = None) -> NoReturn:
    """Abort the current handler and instruct the client to navigate to `path`."""
    raise Redirect(path, cookies)
