from typing import Any
import json as basejson
from .primitives import asPrimitive


def json(value: Any, encoding: str = "utf8") -> bytes:
	"""Serializes the given value as JSON bytes."""
	return basejson.dumps(asPrimitive(value)).encode(encoding)


# EOF
