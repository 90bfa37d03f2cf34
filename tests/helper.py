import http.server
import threading

from mock import Mock
import requests


def build_response_mock(status_code, body=None, headers=None,
                        add_content_length=True, **kwargs):
    real_response = requests.Response()
    real_response.status_code = status_code

    if body is not None and add_content_length:
        real_response.headers['content-length'] = len(body)

    if headers is not None:
        for k, v in headers.items():
            real_response.headers[k] = v

    for k, v in kwargs.items():
        setattr(real_response, k, v)

    response = Mock(wraps=real_response, autospec=True)
    if body:
        response.text = body
    else:
        response.text = ''

    # for some reason, wraps cannot handle attributes which are dicts
    # and accessed by key
    response.headers = real_response.headers
    response.content = body

    return response


class StaticHandler(http.server.BaseHTTPRequestHandler):
    '''Answer every GET with the server's ``body`` as XML.'''

    def do_GET(self):
        body = self.server.body.encode('utf-8')
        self.send_response(200)
        self.send_header('Content-Type', 'application/xml')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


class StaticServer(http.server.HTTPServer):
    '''Local HTTP server, served from a daemon thread, returning ``body``.'''

    def __init__(self, body, server_address=('127.0.0.1', 0)):
        http.server.HTTPServer.__init__(self, server_address, StaticHandler)
        self.body = body
        self.thread = threading.Thread(target=self.serve_forever)
        self.thread.daemon = True
        self.thread.start()

    @property
    def url(self):
        return 'http://%s:%s' % self.server_address

    def stop(self):
        self.shutdown()
        self.server_close()
        self.thread.join()
