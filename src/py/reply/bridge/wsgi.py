from typing import Any, Callable, Iterable
from ..http.model import HTTPRequest
from ..transport import CaptureTransport
from . import THandler, handle

TStartResponse = Callable[[str, list[tuple[str, str]]], Any]
TWSGIApplication = Callable[[dict[str, Any], TStartResponse], Iterable[bytes]]


def application(handler: THandler) -> TWSGIApplication:
	"""Wraps the handler as a WSGI application."""

	def wsgi(environ: dict[str, Any], startResponse: TStartResponse) -> Iterable[bytes]:
		transport = handle(
			handler, HTTPRequest.FromEnviron(environ), CaptureTransport()
		)
		line = transport.statusLine
		startResponse(f"{line.status} {line.message}", transport.headerLines())
		return [transport.payload]

	return wsgi


# EOF
