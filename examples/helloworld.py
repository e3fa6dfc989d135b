from wsgiref.simple_server import make_server
from reply import HTTPRequest, HTTPResponse
from reply.bridge.wsgi import application


def hello(request: HTTPRequest, response: HTTPResponse) -> HTTPResponse | None:
	if request.path == "/old":
		response.redirect("/")
	elif request.path == "/download":
		return response.body(response.file(__file__, {"disposition": "inline"}))
	visits = int(request.header("x-visits", "0") or 0) + 1
	return (
		response.type("text/plain")
		.header("X-Visits", str(visits))
		.cookie("visited", "yes", 3600, {"httponly": True})
		.body("Hello, World !")
		.filter(lambda _: _.upper())
		.cache()
		.compress()
	)


if __name__ == "__main__":
	with make_server("127.0.0.1", 8000, application(hello)) as server:
		server.serve_forever()

# EOF
