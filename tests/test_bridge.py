from io import BytesIO
from typing import Any
from reply import HTTPRequest, HTTPResponse
from reply.bridge import cgi, python, wsgi


def hello(request: HTTPRequest, response: HTTPResponse) -> None:
	response.type("text/plain").body(f"Hello {request.path}")


def test_python_bridge():
	t = python.run(hello).request(path="/world")
	assert str(t.statusLine) == "HTTP/1.1 200 OK"
	assert t.payload == b"Hello /world"


def test_returned_response_is_sent():
	def handler(request: HTTPRequest, response: HTTPResponse) -> HTTPResponse:
		return HTTPResponse(request, "other").status(201)

	t = python.run(handler).request()
	assert t.statusLine.status == 201
	assert t.payload == b"other"


def test_redirect_stops_the_handler():
	reached: list[bool] = []

	def handler(request: HTTPRequest, response: HTTPResponse) -> None:
		response.redirect("/login")
		reached.append(True)

	t = python.run(handler).request()
	assert reached == []
	assert t.statusLine.status == 302
	assert t.getHeader("location") == "/login"
	assert t.payload == b""


def test_errors_become_500():
	def handler(request: HTTPRequest, response: HTTPResponse) -> None:
		response.header("X-Partial", "1")
		response.transport.output.start()
		response.transport.output.write(b"partial")
		raise ValueError("Failure")

	t = python.run(handler).request()
	assert str(t.statusLine) == "HTTP/1.1 500 Internal Server Error"
	assert t.getHeader("content-type") == "text/plain; charset=UTF-8"
	assert t.getHeader("x-partial") is None
	assert t.payload == b"Internal Server Error"


def test_wsgi():
	started: list[Any] = []

	def startResponse(status: str, headers: list[tuple[str, str]]) -> None:
		started.append((status, headers))

	app = wsgi.application(lambda req, res: res.cookie("a", "1").body("Hi"))
	body = app(
		{"REQUEST_METHOD": "GET", "PATH_INFO": "/", "SERVER_PROTOCOL": "HTTP/1.1"},
		startResponse,
	)
	assert b"".join(body) == b"Hi"
	((status, headers),) = started
	assert status == "200 OK"
	assert ("Content-Type", "text/html; charset=UTF-8") in headers
	assert ("Content-Length", "2") in headers
	assert ("Set-Cookie", "a=1; Path=/") in headers


def test_wsgi_not_modified():
	started: list[Any] = []
	app = wsgi.application(lambda req, res: res.body("Hi").cache())
	environ: dict[str, Any] = {"REQUEST_METHOD": "GET"}
	app(environ, lambda s, h: started.append((s, dict(h))))
	etag = started[0][1]["Etag"]
	body = app(dict(environ, HTTP_IF_NONE_MATCH=etag), lambda s, h: started.append((s, h)))
	assert started[1][0] == "304 Not Modified"
	assert b"".join(body) == b""


def test_cgi():
	stream = BytesIO()
	cgi.run(hello, {"PATH_INFO": "/cgi", "FCGI_SERVER_VERSION": "1.0"}, stream)
	raw = stream.getvalue()
	assert raw.startswith(b"Status: 200 OK\r\n")
	assert raw.endswith(b"\r\n\r\nHello /cgi")


def test_cgi_status_header_without_fastcgi():
	stream = BytesIO()
	cgi.run(
		hello,
		{"SERVER_PROTOCOL": "HTTP/1.1", "GATEWAY_INTERFACE": "CGI/1.1", "PATH_INFO": "/cgi"},
		stream,
	)
	raw = stream.getvalue()
	assert raw.startswith(b"Status: 200 OK\r\n")
	assert not raw.startswith(b"HTTP/1.1")
	assert raw.endswith(b"\r\n\r\nHello /cgi")


def test_unencodable_location_becomes_500():
	def handler(request: HTTPRequest, response: HTTPResponse) -> None:
		response.redirect("/café/日本")

	stream = BytesIO()
	cgi.run(handler, {"FCGI_SERVER_VERSION": "1.0"}, stream)
	raw = stream.getvalue()
	assert raw.startswith(b"Status: 500 Internal Server Error\r\n")
	assert b"Location" not in raw
	assert raw.endswith(b"\r\n\r\nInternal Server Error")


def test_invalid_cookie_name_becomes_500():
	def handler(request: HTTPRequest, response: HTTPResponse) -> None:
		response.cookie("bad name", "1").body("Hi")

	t = python.run(handler).request()
	assert t.statusLine.status == 500
	assert t.cookies == []
	assert t.payload == b"Internal Server Error"


def test_handler_may_send_the_response():
	def handler(request: HTTPRequest, response: HTTPResponse) -> None:
		response.body("x").filter(lambda _: _ + "1").send()

	t = python.run(handler).request()
	assert t.statusLine.status == 200
	assert t.payload == b"x1"
	assert t.getHeader("content-length") == "2"


# EOF
