from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping
from mypy_extensions import mypyc_attr
from ..config import CHUNK_SIZE
from ..utils.files import contentType as getContentType
from ..utils.io import asWritable
from ..utils.logging import warning
from ..utils.primitives import TPrimitive
from .model import HTTPRequest

if TYPE_CHECKING:
	from .response import HTTPResponse


@mypyc_attr(allow_interpreted_subclasses=True)
class ResponseContainer(ABC):
	"""A response body that takes care of its own emission: once given to
	`HTTPResponse.body()`, sending the response delegates everything
	(headers included) to the container."""

	@abstractmethod
	def send(self, request: HTTPRequest, response: "HTTPResponse") -> None: ...


class StreamContainer(ResponseContainer):
	"""Sends the chunks produced by the given function as they come, without
	a content length."""

	__slots__ = ["stream"]

	def __init__(self, stream: Callable[[], Iterable[str | bytes | TPrimitive]]):
		self.stream: Callable[[], Iterable[str | bytes | TPrimitive]] = stream

	def send(self, request: HTTPRequest, response: "HTTPResponse") -> None:
		response.sendHeaders()
		output = response.transport.output
		charset = response.getCharset()
		for chunk in self.stream():
			output.write(asWritable(chunk, charset))
		response.transport.finish()


class FileContainer(ResponseContainer):
	"""Sends the contents of a local file. Supported options are
	`contentType` (guessed from the path by default), `fileName`,
	`disposition` (`attachment` or `inline`) and `chunkSize`."""

	__slots__ = ["path", "contentType", "fileName", "disposition", "chunkSize"]

	def __init__(self, path: Path | str, options: Mapping[str, Any] | None = None):
		opts: Mapping[str, Any] = options or {}
		self.path: Path = path if isinstance(path, Path) else Path(path)
		self.contentType: str | None = opts.get("contentType")
		self.fileName: str = opts.get("fileName") or self.path.name
		self.disposition: str = opts.get("disposition", "attachment")
		self.chunkSize: int = int(opts.get("chunkSize", CHUNK_SIZE))

	def send(self, request: HTTPRequest, response: "HTTPResponse") -> None:
		if not self.path.is_file():
			warning("File not found, sending 404", Path=str(self.path))
			response.status(404).body(None).send()
			return
		name = self.fileName.replace("\\", "\\\\").replace('"', '\\"')
		response.type(self.contentType or getContentType(self.path))
		response.header("content-length", str(self.path.stat().st_size))
		response.header("content-disposition", f'{self.disposition}; filename="{name}"')
		response.sendHeaders()
		output = response.transport.output
		with open(self.path, "rb") as f:
			while chunk := f.read(self.chunkSize):
				output.write(chunk)
		response.transport.finish()


# EOF
