"""
This module provides utilities for testing against a stubbed OpenStack API.
"""

import json

import requests

from ..api import Connection


HEAT_URL = "https://heat.example.com:8004"
PROJECT_ID = "project-1234"
TOKEN = "gAAAAAtoken"


def make_connection(endpoints = None):
    """
    Returns a connection for a fake cloud with an orchestration endpoint.
    """
    return Connection(
        TOKEN,
        {"orchestration": HEAT_URL} if endpoints is None else endpoints,
        PROJECT_ID,
    )


def make_response(status_code, body = None, text = None, headers = None):
    """
    Returns a response with the given status code and body.

    If a body is given it is encoded as JSON, otherwise ``text`` is used verbatim.
    """
    response = requests.Response()
    response.status_code = status_code
    if body is not None:
        response._content = json.dumps(body).encode()
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode()
    response.headers.update(headers or {})
    response.encoding = "utf-8"
    return response
