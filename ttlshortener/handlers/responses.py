"""HTTP response builders shared by the handlers.

Responses follow the API Gateway proxy shape:
    {'statusCode': int, 'headers': dict, 'body': <JSON string>}
"""

import json
from typing import Any


JSON_HEADERS = {'Content-Type': 'application/json'}


def json_response(status_code: int, body: Any, headers: dict | None = None) -> dict:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def error_body(base: str, message: str | None = None, error_code: str | None = None) -> dict:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return body


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    return json_response(400, error_body('Bad Request', message, error_code))


def response_404(message: str | None = None, error_code: str | None = None) -> dict:
    return json_response(404, error_body('Not Found', message, error_code))


def response_409(message: str | None = None, error_code: str | None = None) -> dict:
    return json_response(409, error_body('Conflict', message, error_code))


def response_503(message: str | None = None, error_code: str | None = None) -> dict:
    return json_response(503, error_body('Service Unavailable', message, error_code))


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }
