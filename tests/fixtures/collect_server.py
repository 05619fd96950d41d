"""
Local collection endpoint for reporter and client tests
"""
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer


class CollectServer:
    """HTTP server on localhost that records every POSTed payload"""

    def __init__(self, host="127.0.0.1", port=0):
        self.host = host
        self.port = port
        self.status = 200
        self.response_body = "ok"
        self.requests = []
        self.hold = threading.Event()
        self.hold.set()
        self.httpd = None
        self.server_thread = None

    @property
    def url(self):
        return f"http://{self.host}:{self.port}/collect"

    def start(self):
        """Start the server in a background thread"""
        server = self

        class Handler(BaseHTTPRequestHandler):
            def do_POST(self):
                length = int(self.headers.get("Content-Length", 0))
                body = self.rfile.read(length).decode("utf-8")
                server.requests.append({
                    "path": self.path,
                    "headers": dict(self.headers),
                    "body": body,
                })
                # Tests clear 'hold' to keep a transfer in flight
                server.hold.wait(timeout=10)
                payload = server.response_body.encode("utf-8")
                self.send_response(server.status)
                self.send_header("Content-Type", "text/plain")
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                self.wfile.write(payload)

            def log_message(self, format, *args):
                pass

        self.httpd = ThreadingHTTPServer((self.host, self.port), Handler)
        self.port = self.httpd.server_address[1]
        self.server_thread = threading.Thread(target=self.httpd.serve_forever, daemon=True)
        self.server_thread.start()

    def stop(self):
        """Stop the server"""
        self.hold.set()
        if self.httpd:
            self.httpd.shutdown()
            self.httpd.server_close()

    def reset(self):
        self.status = 200
        self.response_body = "ok"
        self.requests.clear()
        self.hold.set()

    def wait_for_requests(self, count, timeout=5.0):
        """Wait until at least count requests arrived"""
        deadline = time.time() + timeout
        while time.time() < deadline:
            if len(self.requests) >= count:
                return True
            time.sleep(0.02)
        return len(self.requests) >= count
