# examplekit

A collection of small, readable programs and library modules, each showing
one idea well: walking HTML trees, crawling links, parsing and evaluating
arithmetic expressions, bit-vector sets, toy HTTP and TCP servers, pipelines,
cancellation, and several ways to make a memoizing cache safe under
concurrency.

## Installing

```
pip install examplekit
```

For running the test suite:

```
pip install "examplekit[test]"
pytest
```

## Command-line programs

Every program is installed as an `ek-` command.

### HTML and the web

```
ek-findlinks < page.html             # print the href of every <a> element
ek-outline < page.html               # print the element stack at each element
ek-outline https://example.com/      # print an indented tag outline of each page
ek-weblinks https://example.com/     # fetch pages and print their links
ek-weblinks --crawl https://example.com/   # crawl links breadth-first
ek-crawl https://example.com/        # crawl links concurrently (--limit, default 20)
ek-title https://example.com/        # print the title of each page
ek-fetch https://example.com/        # save a page to a local file
ek-wait https://example.com/         # wait, with back-off, for a server to answer
```

`ek-title` refuses documents whose `Content-Type` is not `text/html`, and
reports an error when a page has no title or more than one.

### Numbers and text

```
ek-toposort            # courses in an order that respects their prerequisites
ek-sorting             # a playlist sorted by artist, year and a custom order
ek-tempflag -temp 212F # print a temperature given in C or F as Celsius
ek-sleep -period 1.5s  # sleep for a duration such as 1.5s or 2m30s
ek-xmlselect div h2 < doc.xml  # text of elements nested in the named ones
ek-thumbnail           # read image file names on stdin, write .thumb JPEG images
ek-surface             # serve an SVG plot of z = f(x, y) at /plot?expr=...
```

### Servers, clients and concurrency

```
ek-shop        # a tiny shop with /list and /price?item=... endpoints
ek-clock       # a TCP server that writes the time every second (--sequential)
ek-reverb      # a TCP server that echoes each line three times (--concurrent)
ek-chat        # a TCP chat server broadcasting to every client
ek-netcat      # a TCP client copying between the terminal and a server (--read-only)
ek-du -v .     # disk usage of directory trees, with progress reports
ek-pipeline    # counter -> squarer -> printer (a limit, or --forever)
ek-spinner     # a spinner that turns while a slow Fibonacci runs
ek-countdown   # a launch countdown that return aborts
```

The servers and `ek-netcat` use `localhost:8000` unless `--host` and
`--port` say otherwise (`ek-shop` and `ek-surface` always use it). When run
from a terminal, `ek-du` stops early if return is pressed.

## Library use

### Expressions

```python
from examplekit.expr import parse, format_expr, ExprError

expr = parse("pow(x, 3) + pow(y, 3)")
expr.check(set())                     # raises ExprError on bad calls
print(expr.eval({"x": 9, "y": 10}))   # 1729.0
print(format_expr(expr))              # (pow(x, 3) + pow(y, 3))

try:
    parse("x % 2")
except ExprError as err:
    print(err)                        # unexpected '%'
```

### Integer sets

```python
from examplekit.intset import IntSet

x = IntSet()
for n in (1, 144, 9):
    x.add(n)
print(x)              # {1 9 144}
print(x.has(9))       # True
```

### Topological sort

```python
from examplekit.toposort import topo_sort

print(topo_sort({"compilers": ["formal languages"],
                 "formal languages": ["discrete math"]}))
```

### Memoization

```python
from examplekit.memo import Memo

def slow(key):
    return key.upper()

cache = Memo(slow)
print(cache.get("hello"))   # computed once, then served from the cache
```

`MonitorMemo` does the same work through a single monitor thread; call its
`close()` when you are done with it.

### Other modules

- `examplekit.htmltree` – `parse`, `Node`, `for_each_node`, `visit`, `outline`
- `examplekit.links` – `extract`, `find_links`, `breadth_first`
- `examplekit.geometry` – `Point`, `Path`, `ColoredPoint` and `distance`
- `examplekit.urlvalues` – `Values`, a mapping from keys to lists of values
- `examplekit.bytecounter` – `ByteCounter`, a writer that counts bytes
- `examplekit.tempconv` – `Celsius`, `Fahrenheit`, `c_to_f`, `f_to_c`, `parse_celsius`
- `examplekit.durations` – `parse_duration` and `format_duration`
- `examplekit.bank` – `Bank` and `TellerBank`, thread-safe single accounts
- `examplekit.cake` – `Shop`, a simulated bakery pipeline
- `examplekit.thumbnail` – `image`, `image_file` and friends, built on Pillow

## What is not included

The package has no examples of functions that keep state between calls,
variadic sums, entry and exit tracing of a function, or deferred calls
running while an error unwinds the stack.