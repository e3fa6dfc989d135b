from typing import Callable
from ..http.model import HTTPRequest, ResponseSent
from ..http.response import HTTPResponse
from ..http.status import HTTP_STATUS
from ..transport import Transport
from ..utils.logging import error, exception

# A handler configures the response it is given, and may return another
# response to be sent instead.
THandler = Callable[[HTTPRequest, HTTPResponse], HTTPResponse | None]


def handle(handler: THandler, request: HTTPRequest, transport: Transport) -> Transport:
	"""Runs the handler for the given request and sends the resulting response
	through the transport. Errors raised by the handler become a 500 response
	unless the head was already sent."""
	response = HTTPResponse(request, transport=transport)
	try:
		result = handler(request, response)
		if result is not None and result is not response:
			# The returned response replaces the one given to the handler
			result.transport = transport
			response = result
		if not response.isSent():
			response.send()
	except ResponseSent:
		pass
	except Exception as e:
		exception(e, f"Handler failed for {request}")
		if transport.isCommitted:
			error("Response head already sent, can't send error", 500, stack=True)
		else:
			transport.reset()
			HTTPResponse(request, transport=transport).status(500).type(
				"text/plain"
			).body(HTTP_STATUS[500]).send()
	return transport


# EOF
