from .json import json
from .primitives import TPrimitive

DEFAULT_ENCODING: str = "utf8"
EOL: bytes = b"\r\n"


def asWritable(
	value: str | bytes | bytearray | TPrimitive | None,
	encoding: str = DEFAULT_ENCODING,
) -> bytes:
	"""Returns the bytes that represent `value` on the wire: strings are
	encoded, `None` is empty and anything else is dumped as JSON."""
	if value is None:
		return b""
	elif isinstance(value, bytes):
		return value
	elif isinstance(value, bytearray):
		return bytes(value)
	elif isinstance(value, str):
		return value.encode(encoding)
	else:
		return json(value, encoding)


# EOF
