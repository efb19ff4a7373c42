"""Tests for API session tokens."""

import time
from unittest.mock import Mock, patch

import pytest
from django.core.cache.backends.base import BaseCache

from server.apps.accounts.exceptions import SessionStoreError
from server.apps.accounts.logic.session_manager import (
    DEFAULT_TOKEN_TTL,
    SessionStore,
)

_USER_ID = 42


def test_issue_and_resolve(session_store):
    """Test issued tokens resolve to their user."""
    token = session_store.issue(_USER_ID)

    assert len(token) == 32
    assert session_store.resolve(token) == _USER_ID


def test_token_stored_under_prefixed_key(session_store, session_cache):
    """Test the key layout of token entries."""
    token = session_store.issue(_USER_ID)

    assert session_cache.get(f'auth_{token}') == _USER_ID


def test_tokens_are_unique(session_store):
    """Test each issue yields a fresh token."""
    tokens = {session_store.issue(_USER_ID) for _ in range(50)}

    assert len(tokens) == 50


def test_concurrent_sessions(session_store):
    """Test one user may hold several live sessions."""
    first = session_store.issue(_USER_ID)
    second = session_store.issue(_USER_ID)

    session_store.revoke(first)

    assert session_store.resolve(first) is None
    assert session_store.resolve(second) == _USER_ID


@pytest.mark.parametrize('token', [None, '', 'unknown-token'])
def test_resolve_unknown(session_store, token):
    """Test absent tokens resolve to no identity."""
    assert session_store.resolve(token) is None


def test_revoke(session_store):
    """Test revoked tokens stop resolving."""
    token = session_store.issue(_USER_ID)

    assert session_store.revoke(token) is True
    assert session_store.resolve(token) is None


def test_revoke_twice(session_store):
    """Test revoking an absent token is not an error."""
    token = session_store.issue(_USER_ID)
    session_store.revoke(token)

    assert session_store.revoke(token) is False


def test_expired_token(session_cache):
    """Test tokens stop resolving after their lifetime."""
    store = SessionStore(session_cache, ttl=60)
    token = store.issue(_USER_ID)
    expired_at = time.time() + 61

    with patch('django.core.cache.backends.locmem.time') as clock:
        clock.time.return_value = expired_at
        assert store.resolve(token) is None


def test_token_alive_before_expiry(session_cache):
    """Test tokens resolve until their lifetime ends."""
    store = SessionStore(session_cache, ttl=60)
    token = store.issue(_USER_ID)
    almost_expired = time.time() + 30

    with patch('django.core.cache.backends.locmem.time') as clock:
        clock.time.return_value = almost_expired
        assert store.resolve(token) == _USER_ID


def test_default_ttl():
    """Test default lifetime is one day."""
    assert DEFAULT_TOKEN_TTL == 86400


def test_resolve_fails_closed(caplog):
    """Test store errors resolve to no identity."""
    cache = Mock(spec=BaseCache)
    cache.get.side_effect = ConnectionError('redis down')
    store = SessionStore(cache)

    assert store.resolve('some-token') is None
    assert 'Failed to resolve session' in caplog.text


def test_issue_store_error():
    """Test token issuing surfaces store errors."""
    cache = Mock(spec=BaseCache)
    cache.set.side_effect = ConnectionError('redis down')
    store = SessionStore(cache)

    with pytest.raises(SessionStoreError):
        store.issue(_USER_ID)


def test_issue_sets_ttl():
    """Test entries are written with the configured lifetime."""
    cache = Mock(spec=BaseCache)
    store = SessionStore(cache, ttl=120)

    token = store.issue(_USER_ID)

    cache.set.assert_called_once_with(f'auth_{token}', _USER_ID, timeout=120)


def test_is_alive(session_store):
    """Test health check against a working store."""
    assert session_store.is_alive() is True


def test_is_not_alive():
    """Test health check against a broken store."""
    cache = Mock(spec=BaseCache)
    cache.get.side_effect = ConnectionError('redis down')

    assert SessionStore(cache).is_alive() is False
