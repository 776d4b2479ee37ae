from dataclasses import replace

from ironspider.request import Request, Response


class _Owner:
    name = "owner"


def test_request_defaults():
    owner = _Owner()
    request = Request(spider=owner, url="http://localhost:5000/article/4")
    assert request.spider is owner
    assert request.method == "GET"
    assert request.headers is None
    assert request.body is None
    assert request.meta is None


def test_request_carries_all_fields():
    request = Request(
        spider=_Owner(),
        url="http://localhost:5000/submit",
        method="POST",
        headers={"Content-Type": "text/plain"},
        body="hello",
        meta={"depth": "2"},
    )
    assert request.method == "POST"
    assert request.headers == {"Content-Type": "text/plain"}
    assert request.body == "hello"
    assert request.meta == {"depth": "2"}


def test_request_copy_is_equal_and_independent():
    original = Request(spider=_Owner(), url="http://localhost:5000/a")
    copy = replace(original, url="http://localhost:5000/b")
    assert original.url == "http://localhost:5000/a"
    assert copy.url == "http://localhost:5000/b"
    assert copy.spider is original.spider


def test_response_references_request():
    request = Request(spider=_Owner(), url="http://localhost:5000/article/1")
    response = Response(status=200, body="<html></html>", request=request)
    assert response.status == 200
    assert response.body == "<html></html>"
    assert response.request.url == "http://localhost:5000/article/1"