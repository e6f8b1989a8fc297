import io
import socket
import sys
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from examplekit.htmltree import (
    NodeType,
    for_each_node,
    indented_outline,
    main,
    outline,
    outline_main,
    parse,
    visit,
)

PAGE = (
    "<html><head><title>T</title></head><body>"
    "<a href='/one'>1</a><p><a href='/two'>2</a></p></body></html>"
)

ROUTES = {"/page": (200, "text/html", PAGE.encode())}


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        status, ctype, body = ROUTES.get(self.path, (404, "text/plain", b"not found"))
        self.send_response(status)
        self.send_header("Content-Type", ctype)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


def _unused_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_parse_builds_document_tree():
    doc = parse(PAGE)
    assert doc.type is NodeType.DOCUMENT
    assert [child.data for child in doc.children] == ["html"]
    assert [child.data for child in doc.children[0].children] == ["head", "body"]


def test_visit_collects_hrefs_in_document_order():
    assert visit(parse(PAGE)) == ["/one", "/two"]


def test_visit_ignores_other_elements_and_attributes():
    doc = parse('<link href="/style.css"><a name="x">n</a><a id="y" href="/z">z</a>')
    assert visit(doc) == ["/z"]


def test_for_each_node_pre_and_post_order():
    pre, post = [], []
    doc = parse("<div><p></p><span></span></div>")
    for_each_node(
        doc,
        lambda n: pre.append(n.data) if n.type is NodeType.ELEMENT else None,
        lambda n: post.append(n.data) if n.type is NodeType.ELEMENT else None,
    )
    assert pre == ["div", "p", "span"]
    assert post == ["p", "span", "div"]


def test_for_each_node_visits_every_node():
    kinds = []
    for_each_node(parse("<p>hi</p>"), lambda n: kinds.append(n.type))
    assert kinds == [NodeType.DOCUMENT, NodeType.ELEMENT, NodeType.TEXT]


def test_outline_stacks():
    doc = parse("<html><body><p>x</p></body></html>")
    assert list(outline(doc)) == [["html"], ["html", "body"], ["html", "body", "p"]]


def test_indented_outline():
    doc = parse("<html><body></body></html>")
    assert indented_outline(doc) == ["<html>", "  <body>", "  </body>", "</html>"]


def test_void_elements_do_not_nest():
    doc = parse("<p>a<br>b</p>")
    paragraph = doc.children[0]
    assert [c.type for c in paragraph.children] == [
        NodeType.TEXT,
        NodeType.ELEMENT,
        NodeType.TEXT,
    ]
    assert list(outline(doc)) == [["p"], ["p", "br"]]


def test_unmatched_end_tag_is_ignored():
    doc = parse("<div></span>x</div><p></p>")
    assert [c.data for c in doc.children] == ["div", "p"]
    assert doc.children[0].first_child.data == "x"


def test_entities_are_decoded():
    doc = parse("<p>a &amp; b</p>")
    assert doc.children[0].first_child.data == "a & b"


def test_doctype_and_comment_nodes():
    doc = parse("<!DOCTYPE html><!-- note --><p></p>")
    assert [c.type for c in doc.children] == [
        NodeType.DOCTYPE,
        NodeType.COMMENT,
        NodeType.ELEMENT,
    ]
    assert doc.children[0].data == "html"
    assert doc.children[1].data == " note "


def test_parse_accepts_bytes_and_files():
    text = '<a href="/x">x</a>'
    assert visit(parse(text.encode())) == ["/x"]
    assert visit(parse(io.StringIO(text))) == ["/x"]


def test_main_prints_links(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(PAGE))
    assert main([]) == 0
    assert capsys.readouterr().out.splitlines() == ["/one", "/two"]


def test_outline_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("<html><body></body></html>"))
    assert outline_main([]) == 0
    assert capsys.readouterr().out.splitlines() == ["[html]", "[html body]"]


def test_outline_main_fetches_url(server, capsys):
    assert outline_main([server + "/page"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == indented_outline(parse(PAGE))
    assert lines[0] == "<html>"
    assert lines[-1] == "</html>"


def test_outline_main_reports_unreachable(capsys):
    url = f"http://127.0.0.1:{_unused_port()}/"
    assert outline_main([url]) == 1
    assert capsys.readouterr().err.startswith("outline:")