import zlib
from abc import ABC, abstractmethod
from mypy_extensions import mypyc_attr


@mypyc_attr(allow_interpreted_subclasses=True)
class BytesTransform(ABC):
	"""An abstract bytes transform, applied to buffered output."""

	@abstractmethod
	def feed(self, chunk: bytes) -> bytes:
		"""Feeds bytes to the transform, returning what is ready to be sent."""

	@abstractmethod
	def flush(self) -> bytes:
		"""Ensures the transform is flushed, returning the trailing bytes."""


class GZipEncoder(BytesTransform):
	"""Encode bytes as Gzip"""

	__slots__ = ["compressor"]

	def __init__(self, compressionLevel: int = 6) -> None:
		super().__init__()
		self.compressor = zlib.compressobj(
			level=compressionLevel, wbits=zlib.MAX_WBITS | 16
		)

	def feed(self, chunk: bytes) -> bytes:
		return self.compressor.compress(chunk)

	def flush(self) -> bytes:
		return self.compressor.flush()


# EOF
