import time
from hashlib import sha1
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, NoReturn
from .. import config
from ..transport import CaptureTransport, Transport
from ..utils.codec import GZipEncoder
from ..utils.io import asWritable
from ..utils.logging import debug, event, warning
from ..utils.primitives import TPrimitive
from .containers import FileContainer, ResponseContainer, StreamContainer
from .model import CookieSpec, HTTPRequest, ResponseSent
from .status import HTTP_STATUS, NO_BODY_STATUS

TFilter = Callable[[Any], Any]

# Content types that get a `charset` parameter, on top of `text/*`
CHARSET_TYPES: frozenset[str] = frozenset(("application/json", "application/xml"))

COOKIE_OPTIONS: frozenset[str] = frozenset(
	("path", "domain", "secure", "httponly", "samesite")
)

# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


class HTTPResponse:
	"""An HTTP response that is built with chained calls and then sent once
	through its transport.

	```
	response.type("application/json").header("Cache-Control", "no-cache")
	response.body(payload).cache().compress().send()
	```
	"""

	__slots__ = [
		"request",
		"transport",
		"_body",
		"_contentType",
		"_charset",
		"_status",
		"_headers",
		"_cookies",
		"_compress",
		"_cache",
		"_filters",
		"_sent",
	]

	def __init__(
		self,
		request: HTTPRequest,
		body: Any = None,
		*,
		transport: Transport | None = None,
	):
		self.request: HTTPRequest = request
		self.transport: Transport = (
			transport if transport is not None else CaptureTransport()
		)
		self._body: Any = None
		self._contentType: str = config.CONTENT_TYPE
		self._charset: str = config.CHARSET
		self._status: int = 200
		self._headers: dict[str, str] = {}
		self._cookies: list[CookieSpec] = []
		self._compress: bool | None = None
		self._cache: bool | None = None
		self._filters: list[TFilter] = []
		self._sent: bool = False
		self.body(body)

	# =========================================================================
	# CONFIGURATION
	# =========================================================================

	def body(self, body: Any) -> "HTTPResponse":
		self._body = body.getBody() if isinstance(body, HTTPResponse) else body
		return self

	def type(self, contentType: str, charset: str | None = None) -> "HTTPResponse":
		self._contentType = contentType
		if charset is not None:
			self._charset = charset
		return self

	def charset(self, charset: str) -> "HTTPResponse":
		self._charset = charset
		return self

	def status(self, status: int) -> "HTTPResponse":
		"""Sets the status, unknown status codes are ignored."""
		if status in HTTP_STATUS:
			self._status = status
		else:
			warning("Ignoring unknown status code", Status=status, Current=self._status)
		return self

	def filter(self, filter: TFilter) -> "HTTPResponse":
		"""Adds a filter the body goes through before being sent. Filters are
		applied in the order they were added."""
		self._filters.append(filter)
		return self

	def clearFilters(self) -> "HTTPResponse":
		self._filters = []
		return self

	def header(self, name: str, value: str) -> "HTTPResponse":
		self._headers[name.lower()] = value
		return self

	def clearHeaders(self) -> "HTTPResponse":
		self._headers = {}
		return self

	def cookie(
		self,
		name: str,
		value: str,
		ttl: int = 0,
		options: Mapping[str, Any] | None = None,
	) -> "HTTPResponse":
		"""Adds a cookie that expires in `ttl` seconds, or when the browser
		closes when `ttl` is 0. Options are `path`, `domain`, `secure`,
		`httponly` and `samesite`."""
		return self._addCookie(
			name, value, int(time.time()) + ttl if ttl > 0 else 0, options
		)

	def deleteCookie(
		self, name: str, options: Mapping[str, Any] | None = None
	) -> "HTTPResponse":
		"""Adds an empty cookie that expired an hour ago, so that the client
		removes it."""
		return self._addCookie(name, "", int(time.time()) - 3600, options)

	def clearCookies(self) -> "HTTPResponse":
		self._cookies = []
		return self

	def cache(self, enabled: bool = True) -> "HTTPResponse":
		"""Enables the ETag response cache."""
		self._cache = enabled
		return self

	def compress(self, enabled: bool = True) -> "HTTPResponse":
		"""Enables Gzip compression of the body."""
		self._compress = enabled
		return self

	def _addCookie(
		self,
		name: str,
		value: str,
		expires: int,
		options: Mapping[str, Any] | None,
	) -> "HTTPResponse":
		opts: dict[str, Any] = {}
		for k, v in (options or {}).items():
			if k in COOKIE_OPTIONS:
				opts[k] = v
			elif k not in ("name", "value", "ttl"):
				warning("Ignoring unsupported cookie option", Cookie=name, Option=k)
		self._cookies.append(CookieSpec(name=name, value=value, ttl=expires, **opts))
		return self

	# =========================================================================
	# CONTAINERS
	# =========================================================================

	def stream(
		self, stream: Callable[[], Iterable[str | bytes | TPrimitive]]
	) -> StreamContainer:
		return StreamContainer(stream)

	def file(
		self, path: Path | str, options: Mapping[str, Any] | None = None
	) -> FileContainer:
		return FileContainer(path, options)

	# =========================================================================
	# ACCESSORS
	# =========================================================================

	def getBody(self) -> Any:
		return self._body

	def getStatus(self) -> int:
		return self._status

	def getContentType(self) -> str:
		return self._contentType

	def getCharset(self) -> str:
		return self._charset

	def getHeader(self, name: str) -> str | None:
		return self._headers.get(name.lower())

	def getHeaders(self) -> dict[str, str]:
		return self._headers

	def getCookies(self) -> list[CookieSpec]:
		return self._cookies

	def getFilters(self) -> list[TFilter]:
		return self._filters

	def isSent(self) -> bool:
		return self._sent

	# =========================================================================
	# REDIRECTS
	# =========================================================================

	def redirect(self, location: str = "", statusCode: int = 302) -> NoReturn:
		"""Sends a redirect to the given location right away, and stops the
		processing of the request by raising `ResponseSent`."""
		self.status(statusCode)
		self.header("Location", location)
		self._sent = True
		self.sendHeaders()
		self.transport.output.endAll()
		self.transport.finish()
		event("Redirect", location, Status=self._status)
		raise ResponseSent(self)

	def back(self, statusCode: int = 302) -> NoReturn:
		"""Redirects to the referer of the request."""
		self.redirect(self.request.referer(), statusCode)

	# =========================================================================
	# SENDING
	# =========================================================================

	def sendHeaders(self) -> None:
		if self.request.server("FCGI_SERVER_VERSION", False) is not False:
			protocol = "Status:"
		else:
			protocol = self.request.server("SERVER_PROTOCOL", "HTTP/1.1")
		transport = self.transport
		transport.status(protocol, self._status, HTTP_STATUS[self._status])
		content_type = self._contentType
		if content_type.lower().startswith("text/") or content_type in CHARSET_TYPES:
			content_type += f"; charset={self._charset}"
		transport.header("Content-Type", content_type)
		for name, value in self._headers.items():
			transport.header(name, value)
		for cookie in self._cookies:
			transport.cookie(cookie)

	def send(self) -> None:
		"""Sends the response, a response is only ever sent once."""
		if self._sent:
			warning("Response was already sent", Status=self._status, stack=True)
			return
		if isinstance(self._body, ResponseContainer):
			self._body.send(self.request, self)
			self._sent = True
			return
		self._sent = True
		output = self.transport.output
		with output.ensure():
			for f in self._filters:
				self._body = f(self._body)
			payload: bytes = asWritable(self._body, self._charset)
			send_body: bool = True
			if self._cache is True:
				etag = f'"{sha1(payload).hexdigest()}"'
				self.header("ETag", etag)
				if self.request.header("if-none-match") == etag:
					self.status(304)
					send_body = False
			if send_body and self._status not in NO_BODY_STATUS:
				if self._compress:
					self._writeCompressed(payload)
				else:
					output.write(payload)
				if "transfer-encoding" not in self._headers:
					self.header("content-length", str(output.length() or 0))
			self.sendHeaders()
		self.transport.finish()
		if config.LOG_RESPONSES:
			event(
				"Response",
				self._status,
				Type=self._contentType,
				Length=self._headers.get("content-length"),
			)

	def _writeCompressed(self, payload: bytes) -> None:
		output = self.transport.output
		# Proxies must not serve the compressed body to other clients
		self.header("Vary", "Accept-Encoding")
		if self.request.acceptsEncoding("gzip"):
			self.header("Content-Encoding", "gzip")
			# The compressed buffer is closed before the length is measured
			with output.scope(GZipEncoder(config.COMPRESSION_LEVEL)):
				output.write(payload)
		else:
			debug("Client does not accept gzip, sending uncompressed body")
			output.write(payload)

	def __str__(self) -> str:
		return f"Response({self._status} {HTTP_STATUS[self._status]} {self._contentType} {self._headers})"


# EOF
