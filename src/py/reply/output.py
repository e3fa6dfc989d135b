from contextlib import contextmanager
from typing import Callable, Iterator
from .utils.codec import BytesTransform

# -----------------------------------------------------------------------------
#
# OUTPUT BUFFERING
#
# -----------------------------------------------------------------------------
# Output written while a buffer is open is kept in memory until the buffer
# is closed, at which point it goes (transformed) into the enclosing buffer,
# or to the sink once no buffer is left.


class OutputBuffer:
	"""Accumulates output, the optional transform is applied to the whole
	buffered content once the buffer is closed."""

	__slots__ = ["data", "transform"]

	def __init__(self, transform: BytesTransform | None = None):
		self.data: bytearray = bytearray()
		self.transform: BytesTransform | None = transform

	def write(self, chunk: bytes) -> int:
		self.data += chunk
		return len(chunk)

	def drain(self) -> bytes:
		"""Returns the (transformed) buffered content and empties the buffer."""
		data = bytes(self.data)
		self.data.clear()
		if self.transform:
			data = self.transform.feed(data) + self.transform.flush()
		return data

	def __len__(self) -> int:
		return len(self.data)


class Output:
	"""A stack of output buffers in front of a sink."""

	__slots__ = ["buffers", "sink"]

	def __init__(self, sink: Callable[[bytes], None]):
		self.buffers: list[OutputBuffer] = []
		self.sink: Callable[[bytes], None] = sink

	@property
	def level(self) -> int:
		return len(self.buffers)

	def start(self, transform: BytesTransform | None = None) -> OutputBuffer:
		buffer = OutputBuffer(transform)
		self.buffers.append(buffer)
		return buffer

	def write(self, chunk: bytes) -> int:
		if self.buffers:
			return self.buffers[-1].write(chunk)
		elif chunk:
			self.sink(chunk)
		return len(chunk)

	def length(self) -> int | None:
		"""Returns the length of the innermost buffer, `None` when there is no
		buffer."""
		return len(self.buffers[-1]) if self.buffers else None

	def endFlush(self) -> bool:
		"""Closes the innermost buffer, passing its content down the stack."""
		if not self.buffers:
			return False
		data = self.buffers.pop().drain()
		if data:
			self.write(data)
		return True

	def discard(self) -> None:
		"""Drops all the buffers and their content."""
		self.buffers.clear()

	def endAll(self) -> int:
		"""Closes all the buffers, returning how many were closed."""
		count = 0
		while self.endFlush():
			count += 1
		return count

	@contextmanager
	def scope(self, transform: BytesTransform | None = None) -> Iterator[OutputBuffer]:
		"""Opens a buffer that is flushed and closed when the block exits."""
		buffer = self.start(transform)
		try:
			yield buffer
		finally:
			# The buffer may already be closed by `endAll()`
			if buffer in self.buffers:
				while self.buffers[-1] is not buffer:
					self.endFlush()
				self.endFlush()

	@contextmanager
	def ensure(self) -> Iterator[OutputBuffer]:
		"""Makes sure a buffer is open for the duration of the block, opening
		(and then closing) one only when none is open."""
		if self.buffers:
			yield self.buffers[-1]
		else:
			with self.scope() as buffer:
				yield buffer


# EOF
