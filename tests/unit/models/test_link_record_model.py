"""Unit tests for the LinkRecordModel dataclass in link_record_model.py.

Test coverage includes:

1. Model creation
   - Ensures instances can be created with valid field values.
   - Verifies that clicks defaults to 0.

2. Immutability
   - Verifies that all fields are frozen.

3. JSON view
   - Ensures to_dict() renders camelCase keys and ISO-8601 UTC timestamps.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone, UTC

import pytest

from ttlshortener.models import LinkRecordModel


@pytest.fixture
def link():
    created_at = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)
    return LinkRecordModel(
        id='4f1c0d8e',
        original_url='https://example.com/article/123',
        shortcode='abc123',
        created_at=created_at,
        expires_at=created_at + timedelta(minutes=30),
        clicks=7,
    )


# -------------------------------------------------
# 1. Model creation
# -------------------------------------------------


def test_clicks_defaults_to_zero():
    """Verify that clicks can be omitted and defaults to 0."""
    now = datetime(2025, 10, 15, tzinfo=UTC)
    link = LinkRecordModel(id='x', original_url='https://example.com', shortcode='abc', created_at=now, expires_at=now)

    assert link.clicks == 0


# -------------------------------------------------
# 2. Immutability
# -------------------------------------------------


@pytest.mark.parametrize(
    'field, new_value',
    [
        ('id', 'other'),
        ('original_url', 'https://example.com/article/456'),
        ('shortcode', 'def456'),
        ('created_at', datetime(2027, 1, 1, tzinfo=UTC)),
        ('expires_at', datetime(2027, 1, 1, tzinfo=UTC)),
        ('clicks', 3000),
    ],
)
def test_link_record_model_immutability(link, field, new_value):
    """Attempting to modify fields should raise FrozenInstanceError."""
    with pytest.raises(FrozenInstanceError):
        setattr(link, field, new_value)


# -------------------------------------------------
# 3. JSON view
# -------------------------------------------------


def test_to_dict(link):
    assert link.to_dict() == {
        'id': '4f1c0d8e',
        'shortcode': 'abc123',
        'originalUrl': 'https://example.com/article/123',
        'createdAt': '2025-10-15T12:00:00.000Z',
        'expiresAt': '2025-10-15T12:30:00.000Z',
        'clicks': 7,
    }


def test_to_dict_converts_to_utc():
    """Timestamps in other zones are rendered in UTC."""
    created_at = datetime(2025, 10, 15, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    link = LinkRecordModel(
        id='x', original_url='https://example.com', shortcode='abc', created_at=created_at, expires_at=created_at
    )

    assert link.to_dict()['createdAt'] == '2025-10-15T12:00:00.000Z'
