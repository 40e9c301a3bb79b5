import pytest

from cserv.handler import content_type_for, handle_get, validate_path
from cserv.http import HttpRequest, HttpStatus


def _request(path, method="GET"):
    return HttpRequest(method=method, path=path, version="HTTP/1.1")


@pytest.mark.parametrize(
    "path",
    ["/", "/index.html", "/a/b_c-d.css", "/IMG01.png"],
)
def test_validate_path_accepts_safe_paths(path):
    assert validate_path(path) is True


@pytest.mark.parametrize(
    "path",
    [None, "", "index.html", "/../secret", "/a..b", "/a b", "/a%20b", "/é", "/a?x=1"],
)
def test_validate_path_rejects_unsafe_paths(path):
    assert validate_path(path) is False


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/index.html", "text/html"),
        ("/style.css", "text/css"),
        ("/app.js", "application/javascript"),
        ("/logo.png", "image/png"),
        ("/photo.jpg", "image/jpeg"),
        ("/photo.jpeg", "image/jpeg"),
        ("/favicon.ico", "image/x-icon"),
        ("/readme.txt", "text/plain"),
        ("/noext", "text/plain"),
    ],
)
def test_content_type_for(path, expected):
    assert content_type_for(path) == expected


def test_content_type_first_match_wins():
    assert content_type_for("/page.html.css") == "text/html"


def test_serves_file_contents(tmp_path):
    (tmp_path / "hello.txt").write_bytes(b"hello world")
    response = handle_get(_request("/hello.txt"), str(tmp_path))
    assert response.status == HttpStatus.OK
    assert response.body == b"hello world"
    assert response.content_length == len(b"hello world")
    assert response.content_type == "text/plain"


def test_root_serves_index_html(tmp_path):
    (tmp_path / "index.html").write_text("<h1>hi</h1>")
    response = handle_get(_request("/"), tmp_path)
    assert response.status == HttpStatus.OK
    assert response.content_type == "text/html"
    assert response.body == b"<h1>hi</h1>"


def test_binary_file_is_served_whole(tmp_path):
    data = bytes(range(256))
    (tmp_path / "image.png").write_bytes(data)
    response = handle_get(_request("/image.png"), tmp_path)
    assert response.status == HttpStatus.OK
    assert response.body == data
    assert response.content_length == len(data)


def test_missing_file_is_not_found(tmp_path):
    response = handle_get(_request("/missing.css"), tmp_path)
    assert response.status == HttpStatus.NOT_FOUND
    assert response.body == b"Not Found"
    assert response.content_type == "text/css"


def test_invalid_path_is_bad_request(tmp_path):
    response = handle_get(_request("/../etc/passwd"), tmp_path)
    assert response.status == HttpStatus.BAD_REQUEST
    assert response.body == b"Bad Request"
    assert response.content_type == "text/plain"


@pytest.mark.parametrize("method", ["POST", "get", "HEAD"])
def test_other_methods_are_not_allowed(tmp_path, method):
    response = handle_get(_request("/", method=method), tmp_path)
    assert response.status == HttpStatus.METHOD_NOT_ALLOWED
    assert response.body == b"Method Not Allowed"


def test_directory_is_internal_error(tmp_path):
    (tmp_path / "sub").mkdir()
    response = handle_get(_request("/sub"), tmp_path)
    assert response.status == HttpStatus.INTERNAL_SERVER_ERROR
    assert response.body == b"Internal Server Error"


def test_empty_file_is_internal_error(tmp_path):
    (tmp_path / "empty.html").write_bytes(b"")
    response = handle_get(_request("/empty.html"), tmp_path)
    assert response.status == HttpStatus.INTERNAL_SERVER_ERROR
    assert response.content_type == "text/html"


def test_request_path_is_left_unchanged(tmp_path):
    (tmp_path / "index.html").write_text("x")
    request = _request("/")
    handle_get(request, tmp_path)
    assert request.path == "/"