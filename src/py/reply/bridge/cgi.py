import os
import sys
from typing import Any, BinaryIO, Mapping
from ..http.model import HTTPRequest
from ..transport import StreamTransport
from . import THandler, handle


def run(
	handler: THandler,
	environ: Mapping[str, Any] | None = None,
	stream: BinaryIO | None = None,
) -> StreamTransport:
	"""Runs the handler as a CGI/FastCGI program, the response being written
	to the standard output with its status as a `Status:` header."""
	transport = StreamTransport(
		sys.stdout.buffer if stream is None else stream, cgi=True
	)
	handle(
		handler,
		HTTPRequest.FromEnviron(os.environ if environ is None else environ),
		transport,
	)
	return transport


# EOF
