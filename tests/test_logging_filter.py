import logging

from utils.logging_config import HttpxFilter


def _record(msg: str) -> logging.LogRecord:
    return logging.LogRecord("httpx", logging.INFO, "", 0, msg, None, None)


def test_filter_hides_successful_requests():
    filt = HttpxFilter()
    assert not filt.filter(_record('HTTP Request: GET http://api/clients "HTTP/1.1 200 OK"'))
    assert not filt.filter(_record('HTTP Request: PATCH http://api/x "HTTP/1.1 204 No Content"'))


def test_filter_keeps_errors_and_other_lines():
    filt = HttpxFilter()
    assert filt.filter(_record('HTTP Request: GET http://api/leads "HTTP/1.1 401 Unauthorized"'))
    assert filt.filter(_record('HTTP Request: GET http://api/x "HTTP/1.1 500 Internal Server Error"'))
    assert filt.filter(_record("connection reset"))
