from abc import ABC, abstractmethod
from typing import BinaryIO, NamedTuple
from mypy_extensions import mypyc_attr
from .http.model import CookieSpec, headername
from .output import Output
from .utils.io import EOL

# -----------------------------------------------------------------------------
#
# TRANSPORT
#
# -----------------------------------------------------------------------------
# The transport is where a response ends up: it receives the status line,
# the headers and the cookies, and the body through its output buffers. The
# head is committed (written) right before the first body byte, or when the
# transport is finished.


class StatusLine(NamedTuple):
	protocol: str
	status: int
	message: str

	def __str__(self) -> str:
		return f"{self.protocol} {self.status} {self.message}"


@mypyc_attr(allow_interpreted_subclasses=True)
class Transport(ABC):
	def __init__(self) -> None:
		self.output: Output = Output(self._writeBody)
		self.statusLine: StatusLine = StatusLine("HTTP/1.1", 200, "OK")
		# Keyed by lowercase name, the last value set wins
		self.headers: dict[str, str] = {}
		self.cookies: list[CookieSpec] = []
		self.isCommitted: bool = False

	def status(self, protocol: str, status: int, message: str) -> "Transport":
		self.statusLine = StatusLine(protocol, status, message)
		return self

	def header(self, name: str, value: str | int) -> "Transport":
		self.headers[name.lower()] = str(value)
		return self

	def getHeader(self, name: str) -> str | None:
		return self.headers.get(name.lower())

	def cookie(self, cookie: CookieSpec) -> "Transport":
		self.cookies.append(cookie)
		return self

	def headerLines(self) -> list[tuple[str, str]]:
		"""Returns the headers and the `Set-Cookie` directives as
		`(name, value)` pairs."""
		lines: list[tuple[str, str]] = [
			(headername(k), v) for k, v in self.headers.items()
		]
		for cookie in self.cookies:
			lines.append(("Set-Cookie", cookie.header()))
		return lines

	def statusText(self) -> str:
		return str(self.statusLine)

	def head(self) -> bytes:
		"""Serializes the head as a payload."""
		lines: list[str] = [self.statusText()]
		lines += [f"{k}: {v}" for k, v in self.headerLines()]
		lines.append("")
		lines.append("")
		return EOL.join(_.encode("latin-1") for _ in lines)

	def commit(self) -> bool:
		if self.isCommitted:
			return False
		# The head is serialized first, so that a head that can't be encoded
		# leaves the transport uncommitted.
		self._writeHead(self.head())
		self.isCommitted = True
		return True

	def finish(self) -> "Transport":
		"""Commits the head (if not already), to be called once the response
		has been fully emitted."""
		self.commit()
		return self

	def reset(self) -> "Transport":
		"""Discards the status, headers, cookies and buffered output that were
		not committed yet."""
		self.output.discard()
		self.statusLine = StatusLine("HTTP/1.1", 200, "OK")
		self.headers.clear()
		self.cookies.clear()
		return self

	def _writeBody(self, chunk: bytes) -> None:
		self.commit()
		self._write(chunk)

	@abstractmethod
	def _writeHead(self, head: bytes) -> None: ...

	@abstractmethod
	def _write(self, chunk: bytes) -> None: ...


class CaptureTransport(Transport):
	"""Keeps everything in memory, used by the WSGI bridge and for testing."""

	def __init__(self) -> None:
		super().__init__()
		self.body: bytearray = bytearray()

	@property
	def payload(self) -> bytes:
		return bytes(self.body)

	def _writeHead(self, head: bytes) -> None:
		pass

	def _write(self, chunk: bytes) -> None:
		self.body += chunk


class StreamTransport(Transport):
	"""Writes the raw head and body to a binary stream. In `cgi` mode the
	head is the one a CGI program writes to its standard output."""

	def __init__(self, stream: BinaryIO, *, cgi: bool = False) -> None:
		super().__init__()
		self.stream: BinaryIO = stream
		# CGI programs send the status as a `Status:` header
		self.cgi: bool = cgi

	def statusText(self) -> str:
		if self.cgi:
			return f"Status: {self.statusLine.status} {self.statusLine.message}"
		else:
			return super().statusText()

	def _writeHead(self, head: bytes) -> None:
		self.stream.write(head)

	def _write(self, chunk: bytes) -> None:
		self.stream.write(chunk)

	def finish(self) -> "StreamTransport":
		super().finish()
		self.stream.flush()
		return self


# EOF
