from .status import HTTP_STATUS  # NOQA: F401
from .model import HTTPRequest, CookieSpec, ResponseSent  # NOQA: F401
from .containers import ResponseContainer, StreamContainer, FileContainer  # NOQA: F401
from .response import HTTPResponse  # NOQA: F401

# EOF
