import threading
import time
from collections import Counter
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from examplekit.memo import Memo, MonitorMemo, http_get_body

INCOMING = [
    "https://example.com",
    "https://example.org",
    "https://example.net",
    "http://example.com/book",
    "https://example.com",
    "https://example.org",
    "https://example.net",
    "http://example.com/book",
]


class _CountingFetch:
    def __init__(self, delay=0.0):
        self.calls = Counter()
        self._lock = threading.Lock()
        self._delay = delay

    def __call__(self, url):
        with self._lock:
            self.calls[url] += 1
        time.sleep(self._delay)
        if "bad" in url:
            raise ValueError(f"cannot fetch {url}")
        return f"body of {url}".encode()


@pytest.fixture(params=["mutex", "monitor"])
def make_memo(request):
    made = []

    def factory(f):
        memo = Memo(f) if request.param == "mutex" else MonitorMemo(f)
        made.append(memo)
        return memo

    yield factory
    for memo in made:
        if isinstance(memo, MonitorMemo):
            memo.close()


def test_sequential(make_memo):
    fetch = _CountingFetch()
    memo = make_memo(fetch)
    values = [memo.get(url) for url in INCOMING]
    assert values == [f"body of {url}".encode() for url in INCOMING]
    assert values[:4] == values[4:]
    assert fetch.calls == Counter(set(INCOMING))


def test_concurrent_requests_compute_each_key_once(make_memo):
    fetch = _CountingFetch(delay=0.05)
    memo = make_memo(fetch)
    results = {}
    lock = threading.Lock()

    def request(position, url):
        value = memo.get(url)
        with lock:
            results[position] = value

    threads = [
        threading.Thread(target=request, args=(i, url)) for i, url in enumerate(INCOMING * 3)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(results) == len(INCOMING) * 3
    assert all(results[i] == f"body of {url}".encode() for i, url in enumerate(INCOMING * 3))
    assert set(fetch.calls.values()) == {1}
    assert set(fetch.calls) == set(INCOMING)


def test_errors_are_cached(make_memo):
    fetch = _CountingFetch()
    memo = make_memo(fetch)
    for _ in range(2):
        with pytest.raises(ValueError, match="cannot fetch https://example.com/bad"):
            memo.get("https://example.com/bad")
    assert fetch.calls["https://example.com/bad"] == 1


def test_closed_monitor_memo_rejects_requests():
    memo = MonitorMemo(_CountingFetch())
    assert memo.get("k") == b"body of k"
    memo.close()
    with pytest.raises(RuntimeError):
        memo.get("k")


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        found = self.path == "/"
        body = b"hello, memo" if found else b"missing"
        self.send_response(200 if found else 404)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def base_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()


def test_http_get_body(base_url):
    assert http_get_body(base_url + "/") == b"hello, memo"


def test_http_get_body_returns_body_of_error_page(base_url):
    assert http_get_body(base_url + "/nowhere") == b"missing"


def test_memo_over_http(base_url):
    memo = Memo(http_get_body)
    first = memo.get(base_url + "/")
    assert memo.get(base_url + "/") is first
    assert len(first) == len(b"hello, memo")