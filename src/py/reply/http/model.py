import time
from email.utils import formatdate
from http.cookies import Morsel
from typing import TYPE_CHECKING, Any, Mapping, NamedTuple
from urllib.parse import quote

if TYPE_CHECKING:
	from .response import HTTPResponse

# -----------------------------------------------------------------------------
#
# HELPERS
#
# -----------------------------------------------------------------------------


def headername(name: str, *, headers: dict[str, str] = {}) -> str:
	"""Normalizes the header name as `Kebab-Case`."""
	if name in headers:
		return headers[name]
	key: str = name.lower()
	if key in headers:
		return headers[key]
	else:
		normalized: str = "-".join(_.capitalize() for _ in name.split("-"))
		headers[key] = normalized
		return normalized


# -----------------------------------------------------------------------------
#
# COOKIES
#
# -----------------------------------------------------------------------------


class CookieSpec(NamedTuple):
	"""A cookie to be set by the response. The `ttl` is an absolute expiry
	timestamp, `0` meaning the cookie lasts until the browser closes."""

	name: str
	value: str
	ttl: int = 0
	path: str = "/"
	domain: str = ""
	secure: bool = False
	httponly: bool = False
	samesite: str | None = None

	def header(self, now: float | None = None) -> str:
		"""Returns the value of the `Set-Cookie` header for this cookie."""
		morsel: Morsel[str] = Morsel()
		morsel.set(self.name, self.value, quote(self.value, safe=""))
		if self.ttl:
			t = int(time.time() if now is None else now)
			morsel["expires"] = formatdate(self.ttl, usegmt=True)
			morsel["max-age"] = max(0, self.ttl - t)
		if self.path:
			morsel["path"] = self.path
		if self.domain:
			morsel["domain"] = self.domain
		morsel["secure"] = self.secure
		morsel["httponly"] = self.httponly
		if self.samesite:
			morsel["samesite"] = self.samesite
		return morsel.OutputString()


# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class ResponseSent(Exception):
	"""Raised once a response has been fully emitted outside of the regular
	`send()` flow (ie. a redirect), so that request processing stops."""

	def __init__(self, response: "HTTPResponse"):
		super().__init__(f"Response already sent: {response.getStatus()}")
		self.response: "HTTPResponse" = response


# -----------------------------------------------------------------------------
#
# REQUESTS
#
# -----------------------------------------------------------------------------


class HTTPRequest:
	"""The request as seen by a response: header lookup, server variables
	(in the CGI sense) and the referer."""

	__slots__ = ["method", "path", "query", "protocol", "_headers", "_server"]

	@staticmethod
	def FromEnviron(environ: Mapping[str, Any]) -> "HTTPRequest":
		"""Creates a request from a WSGI or CGI environment."""
		headers: dict[str, str] = {}
		for k, v in environ.items():
			if k.startswith("HTTP_"):
				headers[k[5:].replace("_", "-").lower()] = str(v)
			elif k in ("CONTENT_TYPE", "CONTENT_LENGTH") and v:
				headers[k.replace("_", "-").lower()] = str(v)
		return HTTPRequest(
			method=environ.get("REQUEST_METHOD", "GET"),
			path=environ.get("PATH_INFO", "/") or "/",
			query=environ.get("QUERY_STRING", ""),
			headers=headers,
			server=environ,
			protocol=environ.get("SERVER_PROTOCOL", "HTTP/1.1"),
		)

	def __init__(
		self,
		method: str = "GET",
		path: str = "/",
		query: str = "",
		headers: Mapping[str, str] | None = None,
		server: Mapping[str, Any] | None = None,
		protocol: str = "HTTP/1.1",
	):
		self.method: str = method
		self.path: str = path
		self.query: str = query
		self.protocol: str = protocol
		self._headers: dict[str, str] = (
			{k.lower(): v for k, v in headers.items()} if headers else {}
		)
		self._server: Mapping[str, Any] = server if server is not None else {}

	@property
	def headers(self) -> dict[str, str]:
		return self._headers

	def header(self, name: str, default: str | None = None) -> str | None:
		return self._headers.get(name.lower(), default)

	def server(self, key: str, default: Any = None) -> Any:
		return self._server.get(key, default)

	def referer(self, default: str = "") -> str:
		return self._headers.get("referer", default)

	def acceptsEncoding(self, encoding: str) -> bool:
		"""Tells if the `Accept-Encoding` header allows the given encoding."""
		accepted = self.header("accept-encoding")
		if not accepted:
			return False
		for item in accepted.split(","):
			name, _, params = item.strip().partition(";")
			name = name.strip().lower()
			if name not in (encoding.lower(), "*"):
				continue
			q = params.strip()
			if q.startswith("q="):
				try:
					return float(q[2:]) > 0
				except ValueError:
					return False
			return True
		return False

	def __str__(self) -> str:
		return f"Request({self.method} {self.path}{f'?{self.query}' if self.query else ''} {self.headers})"


# EOF
