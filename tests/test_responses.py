from message_board.models import Message
from message_board.render import render_page
from message_board.responses import error_response, get_response, post_response


def test_error_response():
    response = error_response("Missing field 'message")
    assert response.status_code == 500
    assert response.media_type == "application/json"
    assert response.body == b'{"error":"Missing field \'message"}'


def test_post_response():
    response = post_response(1700000000)
    assert response.status_code == 200
    assert response.media_type == "application/json"
    assert response.body == b'{"timestamp":1700000000}'


def test_get_response_renders_html():
    response = get_response([Message(username="bob", message="hi", timestamp=7)])
    assert response.status_code == 200
    assert response.media_type == "text/html"
    assert b"<li>bob (7): hi</li>" in response.body


def test_get_response_empty_list_is_success():
    response = get_response([])
    assert response.status_code == 200
    assert b"<ul></ul>" in response.body


def test_get_response_failure_has_no_body():
    response = get_response(None)
    assert response.status_code == 500
    assert response.body == b""


def test_render_page_layout():
    page = render_page([])
    assert page.startswith("<head><title>microservice</title>")
    assert "body { font-family: monospace }" in page
    assert page.endswith("<body><ul></ul></body>")


def test_render_page_escapes_and_keeps_order():
    page = render_page(
        [
            Message(username="<b>eve</b>", message="a & b", timestamp=2),
            Message(username="ann", message='"quoted"', timestamp=1),
        ]
    )
    assert "<li>&lt;b&gt;eve&lt;/b&gt; (2): a &amp; b</li>" in page
    assert "<li>ann (1): &#34;quoted&#34;</li>" in page
    assert page.index("eve") < page.index("ann")
