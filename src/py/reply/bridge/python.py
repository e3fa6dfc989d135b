from typing import Any, Mapping
from ..http.model import HTTPRequest
from ..transport import CaptureTransport
from . import THandler, handle


class PythonBridge:
	"""Calls a handler directly from Python, capturing the response."""

	def __init__(self, handler: THandler):
		self.handler: THandler = handler

	def request(
		self,
		method: str = "GET",
		path: str = "/",
		headers: Mapping[str, str] | None = None,
		server: Mapping[str, Any] | None = None,
	) -> CaptureTransport:
		transport = CaptureTransport()
		handle(
			self.handler,
			HTTPRequest(method=method, path=path, headers=headers, server=server),
			transport,
		)
		return transport


def run(handler: THandler) -> PythonBridge:
	return PythonBridge(handler)


# EOF
