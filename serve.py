#!/usr/bin/env python3
# /// script
# requires-python = ">=3.10"
# ///
"""
serve.py — local dev server for the browser build.

Serves the current directory and opens it in the default browser.
Required because ES modules don't load over file:// URLs.

Usage:
    uv run serve.py          # http://localhost:8080
    uv run serve.py 3000     # http://localhost:3000
"""

import functools
import html
import http.server
import re
import sys
import threading
import urllib.parse
import webbrowser
from http import HTTPStatus


# ─────────────────────────────────────────────────────────────────────────────
# USER CONFIGURATION
# ─────────────────────────────────────────────────────────────────────────────
DEFAULT_PORT = 8080
ROOT         = "."     # directory to serve
MAX_AGE      = 0       # Cache-Control max-age, in seconds
# ─────────────────────────────────────────────────────────────────────────────

ERROR_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Error</title>
</head>
<body>
<pre>{message}</pre>
</body>
</html>
"""


def parse_port(argv):
    """Return the port given as the first argument after the script path.

    Falls back to DEFAULT_PORT when no argument is given. Raises ValueError
    for anything that isn't a plain decimal number in the TCP port range.
    """
    if len(argv) < 2:
        return DEFAULT_PORT
    text = argv[1]
    if not re.fullmatch(r"[0-9]+", text):
        raise ValueError(f"Invalid port {text!r}: expected a decimal number")
    port = int(text, 10)
    if port > 65535:
        raise ValueError(f"Invalid port {port}: must be between 0 and 65535")
    return port


def url_path(raw):
    """Request target without query string or fragment."""
    return raw.split("?", 1)[0].split("#", 1)[0]


def is_hidden(raw):
    """True when any segment of the decoded path is a dotfile or dot-directory."""
    parts = urllib.parse.unquote(url_path(raw)).split("/")
    return any(p.startswith(".") and p not in (".", "..") for p in parts)


class DevRequestHandler(http.server.SimpleHTTPRequestHandler):
    """Static files from the served directory, with a last-resort error page.

    Only GET and HEAD are served. Every response that isn't a file goes
    through ``done``: 404 when nothing matched, 500 when serving failed.
    """

    allowed_methods = ("GET", "HEAD")

    def send_head(self):
        if is_hidden(self.path):
            return self.done()
        try:
            return super().send_head()
        except Exception as e:
            return self.done(e)

    def done(self, err=None):
        if err is None:
            self.send_error(HTTPStatus.NOT_FOUND)
        else:
            print(f"  Error serving {self.path}: {err!r}")
            self.send_error(HTTPStatus.INTERNAL_SERVER_ERROR)
        return None

    def list_directory(self, path):
        # Directories without an index document are not browsable.
        return self.done()

    def method_not_allowed(self):
        self.send_error(HTTPStatus.METHOD_NOT_ALLOWED)

    do_POST = do_PUT = do_DELETE = do_PATCH = do_OPTIONS = method_not_allowed

    def send_response(self, code, message=None):
        self._status = code
        super().send_response(code, message)

    def end_headers(self):
        if getattr(self, "_status", None) == HTTPStatus.OK:
            self.send_header("Cache-Control", f"public, max-age={MAX_AGE}")
        super().end_headers()

    def send_error(self, code, message=None, explain=None):
        """Write the error page for ``code``; HEAD requests get headers only."""
        status = HTTPStatus(code)
        path = url_path(getattr(self, "path", ""))
        if status is HTTPStatus.NOT_FOUND:
            text = f"Cannot {self.command} {html.escape(path)}"
        else:
            text = status.phrase
        body = ERROR_PAGE.format(message=text).encode("utf-8")

        self.log_error("code %d, message %s", status.value, message or status.phrase)
        self.send_response(status.value, message)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Content-Security-Policy", "default-src 'none'")
        self.send_header("X-Content-Type-Options", "nosniff")
        if status is HTTPStatus.METHOD_NOT_ALLOWED:
            self.send_header("Allow", ", ".join(self.allowed_methods))
        self.send_header("Connection", "close")
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)


def make_server(port, root=ROOT):
    """Bind on all interfaces; the caller runs serve_forever()."""
    handler = functools.partial(DevRequestHandler, directory=root)
    return http.server.ThreadingHTTPServer(("", port), handler)


def open_browser(url, opener=webbrowser.open):
    """Launch the browser on a background thread and don't wait for it."""
    def target():
        try:
            opener(url)
        except Exception as e:
            print(f"  Could not open browser at {url}: {e!r}")

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread


def run(port, root=ROOT, opener=webbrowser.open):
    server = make_server(port, root)
    url = f"http://localhost:{server.server_address[1]}"
    print(f"Serving {root} at {url}")
    print("Press Ctrl+C to stop\n")
    open_browser(url, opener)
    with server:
        server.serve_forever()


def main(argv=None):
    if argv is None:
        argv = sys.argv
    try:
        port = parse_port(argv)
    except ValueError as e:
        print(e)
        print("Usage: uv run serve.py [port]")
        sys.exit(1)

    try:
        run(port)
    except OSError as e:
        print(f"Cannot listen on port {port}: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nServer stopped.")


if __name__ == "__main__":
    main()
