from .http.model import (
	HTTPRequest,
	CookieSpec,
	ResponseSent,
)  # NOQA: F401
from .http.containers import (
	ResponseContainer,
	StreamContainer,
	FileContainer,
)  # NOQA: F401
from .http.response import HTTPResponse  # NOQA: F401
from .http.status import HTTP_STATUS  # NOQA: F401
from .transport import Transport, CaptureTransport, StreamTransport  # NOQA: F401

__version__ = "1.0.0"

# EOF
