from pathlib import Path
from reply import HTTPRequest, HTTPResponse, CaptureTransport


def response() -> HTTPResponse:
	return HTTPResponse(HTTPRequest())


def transport(r: HTTPResponse) -> CaptureTransport:
	assert isinstance(r.transport, CaptureTransport)
	return r.transport


def test_stream():
	def chunks():
		yield "a"
		yield b"b"
		yield {"c": 1}

	r = response().type("text/plain")
	r.body(r.stream(chunks)).send()
	t = transport(r)
	assert str(t.statusLine) == "HTTP/1.1 200 OK"
	assert t.getHeader("content-type") == "text/plain; charset=UTF-8"
	assert t.getHeader("content-length") is None
	assert t.payload == b'ab{"c": 1}'
	assert t.isCommitted


def test_container_skips_filters_and_cache():
	r = response().filter(lambda _: b"filtered").cache()
	r.body(r.stream(lambda: iter([b"raw"]))).send()
	t = transport(r)
	assert t.payload == b"raw"
	assert t.getHeader("etag") is None


def test_file(tmp_path: Path):
	path = tmp_path / "report.txt"
	path.write_bytes(b"line 1\nline 2\n")
	r = response()
	r.body(r.file(path)).send()
	t = transport(r)
	assert t.payload == b"line 1\nline 2\n"
	assert t.getHeader("content-type") == "text/plain; charset=UTF-8"
	assert t.getHeader("content-length") == "14"
	assert t.getHeader("content-disposition") == 'attachment; filename="report.txt"'


def test_file_options(tmp_path: Path):
	path = tmp_path / "blob"
	path.write_bytes(bytes(range(10)))
	r = response()
	r.body(
		r.file(
			str(path),
			{
				"contentType": "application/octet-stream",
				"fileName": 'data "1".bin',
				"disposition": "inline",
				"chunkSize": 3,
			},
		)
	).send()
	t = transport(r)
	assert t.payload == bytes(range(10))
	assert t.getHeader("content-type") == "application/octet-stream"
	assert t.getHeader("content-disposition") == 'inline; filename="data \\"1\\".bin"'


def test_missing_file(tmp_path: Path):
	r = response()
	r.body(r.file(tmp_path / "missing.txt")).send()
	t = transport(r)
	assert r.getStatus() == 404
	assert str(t.statusLine) == "HTTP/1.1 404 Not Found"
	assert t.payload == b""
	assert t.getHeader("content-length") == "0"


# EOF
