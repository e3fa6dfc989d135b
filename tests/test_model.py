import pytest
from reply import HTTP_STATUS, CookieSpec, HTTPRequest
from reply.http.model import headername


def test_status_table():
	assert len(HTTP_STATUS) == 56
	assert 306 not in HTTP_STATUS
	assert HTTP_STATUS[418] == "I'm a teapot"
	assert HTTP_STATUS[421] == "There are too many connections from your internet address"
	assert HTTP_STATUS[450] == "Blocked by Windows Parental Controls"
	assert HTTP_STATUS[530] == "User access denied"
	with pytest.raises(TypeError):
		HTTP_STATUS[299] = "Custom"  # type: ignore[index]


def test_headername():
	assert headername("content-type") == "Content-Type"
	assert headername("x-powered-by") == "X-Powered-By"
	assert headername("ETAG") == "Etag"


def test_cookie_header():
	assert CookieSpec("a", "v").header() == "a=v; Path=/"
	assert CookieSpec("a", "", path="").header() == "a="
	value = CookieSpec(
		"sid",
		"x;y",
		ttl=1000 + 3600,
		domain="example.com",
		secure=True,
		httponly=True,
		samesite="Lax",
	).header(now=1000)
	parts = value.split("; ")
	assert parts[0] == "sid=x%3By"
	assert "expires=Thu, 01 Jan 1970 01:16:40 GMT" in parts
	assert "Max-Age=3600" in parts
	assert "Domain=example.com" in parts
	assert "Path=/" in parts
	assert "Secure" in parts
	assert "HttpOnly" in parts
	assert "SameSite=Lax" in parts


def test_expired_cookie_header():
	value = CookieSpec("a", "", ttl=1000).header(now=4600)
	assert "Max-Age=0" in value.split("; ")


def test_request():
	r = HTTPRequest(headers={"If-None-Match": '"abc"'}, server={"HTTPS": "on"})
	assert r.header("if-none-match") == '"abc"'
	assert r.header("IF-NONE-MATCH") == '"abc"'
	assert r.header("x-missing") is None
	assert r.header("x-missing", "-") == "-"
	assert r.server("HTTPS") == "on"
	assert r.server("FCGI_SERVER_VERSION", False) is False
	assert r.referer() == ""
	assert r.referer("/") == "/"


def test_request_from_environ():
	r = HTTPRequest.FromEnviron(
		{
			"REQUEST_METHOD": "POST",
			"PATH_INFO": "/upload",
			"QUERY_STRING": "a=1",
			"SERVER_PROTOCOL": "HTTP/1.0",
			"CONTENT_TYPE": "text/plain",
			"CONTENT_LENGTH": "",
			"HTTP_REFERER": "/form",
			"HTTP_ACCEPT_ENCODING": "gzip",
		}
	)
	assert r.method == "POST"
	assert r.path == "/upload"
	assert r.query == "a=1"
	assert r.protocol == "HTTP/1.0"
	assert r.headers == {
		"content-type": "text/plain",
		"referer": "/form",
		"accept-encoding": "gzip",
	}
	assert r.referer() == "/form"
	assert r.server("SERVER_PROTOCOL") == "HTTP/1.0"


@pytest.mark.parametrize(
	"header,expected",
	[
		(None, False),
		("gzip", True),
		("deflate, GZIP", True),
		("br;q=1.0, gzip;q=0.5", True),
		("gzip;q=0", False),
		("*", True),
		("br", False),
	],
)
def test_accepts_encoding(header: str | None, expected: bool):
	headers = {"Accept-Encoding": header} if header else {}
	assert HTTPRequest(headers=headers).acceptsEncoding("gzip") is expected


# EOF
