"""HTTP client abstraction for repository lookups.

This module provides:
- HttpClient: Protocol for the one operation remote resolution needs
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import base64
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from mrel.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "basic_auth_header",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """Network-level failure: no HTTP status could be obtained.

    Attributes:
        url: The URL that failed
        message: Human-readable error message
    """

    url: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


def basic_auth_header(username: str, password: str | None) -> str:
    token = base64.b64encode(f"{username}:{password or ''}".encode()).decode("ascii")
    return f"Basic {token}"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations (injectable for tests)."""

    def head(self, url: str, *, auth: tuple[str, str | None] | None = None) -> Result[int, HttpError]:
        """Send a HEAD request.

        Every HTTP answer, 404 and 500 included, is Ok(status). Err means no
        answer was obtained (DNS, refused connection, TLS, timeout).
        """
        ...


class RealHttpClient:
    """HTTP client using urllib with the system certificates."""

    def __init__(self, timeout: float = 30.0, user_agent: str = "mrel/0.1.0") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def head(self, url: str, *, auth: tuple[str, str | None] | None = None) -> Result[int, HttpError]:
        headers = {"User-Agent": self.user_agent}
        if auth is not None:
            headers["Authorization"] = basic_auth_header(*auth)
        try:
            req = urllib.request.Request(url, headers=headers, method="HEAD")
            with urllib.request.urlopen(req, timeout=self.timeout, context=self._ssl_context) as response:
                return Ok(int(response.status))
        except urllib.error.HTTPError as e:
            return Ok(int(e.code))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, message=str(e)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Unknown URLs answer 404.

    Usage:
        client = MockHttpClient()
        client.set_status("https://repo/com/x/1.0/x-1.0.pom", 200)
        client.set_error("https://down.example/", "connection refused")
    """

    def __init__(self) -> None:
        self._responses: dict[str, int | HttpError] = {}
        self._prefix_errors: dict[str, HttpError] = {}
        self.calls: list[tuple[str, tuple[str, str | None] | None]] = []

    def set_status(self, url: str, status: int) -> None:
        self._responses[url] = status

    def set_error(self, url_prefix: str, message: str) -> None:
        """Fail every request whose URL starts with ``url_prefix``."""
        self._prefix_errors[url_prefix] = HttpError(url=url_prefix, message=message)

    def head(self, url: str, *, auth: tuple[str, str | None] | None = None) -> Result[int, HttpError]:
        self.calls.append((url, auth))

        for prefix, error in self._prefix_errors.items():
            if url.startswith(prefix):
                return Err(HttpError(url=url, message=error.message))

        response = self._responses.get(url, 404)
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
