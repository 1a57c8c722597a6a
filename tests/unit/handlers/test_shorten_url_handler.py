"""Unit tests for the shorten_url handler.

Verify the handler creates links one by one, reports per-entry outcomes for
batches, and maps registry errors to HTTP status codes.

Test coverage includes:

1. Single entry
   - Ensures a valid entry returns 201 with the created link.
   - Ensures validation errors return 400, collisions 409, exhaustion 503.

2. Batch
   - Ensures each entry is created independently; failures don't block siblings.
   - Ensures blank entries are skipped.
   - Ensures more than 5 entries are refused.

3. Malformed requests
   - Ensures invalid JSON and non-object bodies return 400.

4. Unexpected errors
   - Ensures registry crashes turn into 500 responses outside local runs.
"""

import json
from unittest.mock import MagicMock

import pytest

from ttlshortener.dao.base import LinkBaseDAO
from ttlshortener.exceptions import GenerationExhaustedError
from ttlshortener.handlers.shorten_url import app


def event(body) -> dict:
    return {'body': json.dumps(body)}


def body(response) -> dict:
    return json.loads(response['body'])


# -------------------------------
# 1. Single entry
# -------------------------------


def test_single_entry_created(registry):
    response = app.handler(event({'url': 'https://example.com', 'ttlMinutes': 30, 'customCode': 'abc123'}), registry)
    link = body(response)['link']

    assert response['statusCode'] == 201
    assert response['headers']['Content-Type'] == 'application/json'
    assert link['shortcode'] == 'abc123'
    assert link['originalUrl'] == 'https://example.com'
    assert link['shortUrl'] == 'http://localhost:3000/abc123'
    assert link['clicks'] == 0
    assert body(response)['message'] == 'Successfully shortened https://example.com to http://localhost:3000/abc123'
    assert registry.resolve('abc123') is not None


def test_single_entry_defaults(registry):
    """ttlMinutes and customCode are optional."""
    response = app.handler(event({'url': 'https://example.com'}), registry)
    link = body(response)['link']

    assert response['statusCode'] == 201
    assert len(link['shortcode']) == 6
    assert link['expiresAt'] == '2025-10-15T12:30:00.000Z'


def test_single_entry_strips_whitespace(registry):
    response = app.handler(event({'url': '  https://example.com  ', 'customCode': ' abc123 '}), registry)
    link = body(response)['link']

    assert link['originalUrl'] == 'https://example.com'
    assert link['shortcode'] == 'abc123'


def test_single_entry_blank_custom_code_generates_one(registry):
    response = app.handler(event({'url': 'https://example.com', 'customCode': '   '}), registry)
    assert len(body(response)['link']['shortcode']) == 6


@pytest.mark.parametrize(
    'entry, error_code',
    [
        ({'url': 'ftp://bad', 'ttlMinutes': 30}, 'validation:invalid_url'),
        ({'ttlMinutes': 30}, 'validation:invalid_url'),
        ({'url': 'https://example.com', 'ttlMinutes': 0}, 'validation:invalid_ttl'),
        ({'url': 'https://example.com', 'ttlMinutes': '30'}, 'validation:invalid_ttl'),
        ({'url': 'https://example.com', 'customCode': 'no-dashes'}, 'validation:invalid_shortcode'),
    ],
)
def test_single_entry_invalid(registry, entry, error_code):
    response = app.handler(event(entry), registry)

    assert response['statusCode'] == 400
    assert body(response)['errorCode'] == error_code
    assert body(response)['message'].startswith('Bad Request (')
    assert registry.all_records() == ()


def test_single_entry_collision(registry):
    app.handler(event({'url': 'https://a.com', 'customCode': 'ab'}), registry)
    response = app.handler(event({'url': 'https://b.com', 'customCode': 'ab'}), registry)

    assert response['statusCode'] == 409
    assert body(response)['errorCode'] == 'registry:shortcode_collision'
    assert registry.resolve('ab').original_url == 'https://a.com'


def test_single_entry_generation_exhausted():
    registry = MagicMock(spec=LinkBaseDAO)
    registry.create.side_effect = GenerationExhaustedError('out of codes')

    response = app.handler(event({'url': 'https://example.com'}), registry)

    assert response['statusCode'] == 503
    assert body(response)['errorCode'] == 'registry:generation_exhausted'


# -------------------------------
# 2. Batch
# -------------------------------


def test_batch_entries_are_independent(registry):
    """A failure at entry N neither undoes nor blocks the other entries."""
    links = [
        {'url': 'https://one.example.com', 'customCode': 'one'},
        {'url': 'ftp://bad'},
        {'url': 'https://two.example.com', 'customCode': 'one'},
        {'url': 'https://three.example.com', 'ttlMinutes': 5},
        {'url': 'https://four.example.com', 'ttlMinutes': -5},
    ]
    response = app.handler(event({'links': links}), registry)
    results = body(response)['results']

    assert response['statusCode'] == 200
    assert [result['status'] for result in results] == ['created', 'error', 'error', 'created', 'error']
    assert [result['index'] for result in results] == [0, 1, 2, 3, 4]
    assert results[1]['errorCode'] == 'validation:invalid_url'
    assert results[2]['errorCode'] == 'registry:shortcode_collision'
    assert results[4]['errorCode'] == 'validation:invalid_ttl'
    assert body(response)['created'] == 2
    assert body(response)['failed'] == 3
    assert [link.original_url for link in registry.list_active()] == [
        'https://one.example.com',
        'https://three.example.com',
    ]


def test_batch_skips_blank_entries(registry):
    links = [{'url': ''}, {'url': '   ', 'customCode': 'abc'}, {}, {'url': 'https://example.com'}]
    response = app.handler(event({'links': links}), registry)
    results = body(response)['results']

    assert [result['status'] for result in results] == ['skipped', 'skipped', 'skipped', 'created']
    assert body(response)['created'] == 1
    assert body(response)['failed'] == 0


def test_batch_non_object_entry(registry):
    response = app.handler(event({'links': ['https://example.com', {'url': 'https://example.com'}]}), registry)
    results = body(response)['results']

    assert [result['status'] for result in results] == ['error', 'created']
    assert results[0]['errorCode'] == 'validation:validation_error'


def test_batch_of_five_accepted(registry):
    links = [{'url': f'https://example.com/{index}'} for index in range(5)]
    response = app.handler(event({'links': links}), registry)

    assert body(response)['created'] == 5


def test_batch_of_six_refused(registry):
    links = [{'url': f'https://example.com/{index}'} for index in range(6)]
    response = app.handler(event({'links': links}), registry)

    assert response['statusCode'] == 400
    assert body(response)['errorCode'] == 'BATCH_TOO_LARGE'
    assert registry.all_records() == ()


def test_batch_size_is_configurable(registry):
    links = [{'url': f'https://example.com/{index}'} for index in range(3)]
    response = app.handler(event({'links': links}), registry, max_batch_size=2)

    assert response['statusCode'] == 400


def test_empty_batch(registry):
    response = app.handler(event({'links': []}), registry)

    assert response['statusCode'] == 200
    assert body(response) == {'results': [], 'created': 0, 'failed': 0}


# -------------------------------
# 3. Malformed requests
# -------------------------------


@pytest.mark.parametrize(
    'request_event',
    [
        {'body': '{not json'},
        {'body': '[1, 2]'},
        {'body': '"https://example.com"'},
        {'body': json.dumps({'links': 'https://example.com'})},
    ],
)
def test_malformed_request(registry, request_event):
    response = app.handler(request_event, registry)

    assert response['statusCode'] == 400
    assert body(response)['errorCode'] == 'INVALID_REQUEST_BODY'


def test_missing_body_is_an_invalid_url(registry):
    response = app.handler({}, registry)

    assert response['statusCode'] == 400
    assert body(response)['errorCode'] == 'validation:invalid_url'


# -------------------------------
# 4. Unexpected errors
# -------------------------------


def test_unexpected_error_returns_500(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'prod')
    registry = MagicMock(spec=LinkBaseDAO)
    registry.create.side_effect = RuntimeError('boom')

    response = app.handler(event({'url': 'https://example.com'}), registry)

    assert response['statusCode'] == 500
