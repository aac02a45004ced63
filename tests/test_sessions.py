from datetime import datetime, timedelta, timezone

from typely.sessions import MemorySessionStore


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self.now


def test_store_create_read_destroy():
    store = MemorySessionStore(timedelta(hours=24))
    token = store.create({'user': {'id': 1, 'username': 'alice'}})

    assert store.read(token) == {'user': {'id': 1, 'username': 'alice'}}
    assert store.read('unknown-token') is None

    store.destroy(token)
    assert store.read(token) is None
    assert len(store) == 0


def test_store_tokens_are_unique():
    store = MemorySessionStore(timedelta(hours=24))
    assert store.create({'a': 1}) != store.create({'a': 1})


def test_store_expiry_is_absolute():
    clock = FakeClock()
    store = MemorySessionStore(timedelta(hours=24), clock=clock)
    token = store.create({'a': 1})
    expires = store.expires_at(token)

    clock.now += timedelta(hours=23)
    store.write(token, {'a': 2})
    assert store.expires_at(token) == expires
    assert store.read(token) == {'a': 2}

    clock.now += timedelta(hours=1)
    assert store.read(token) is None
    assert len(store) == 0


def test_read_returns_a_copy():
    store = MemorySessionStore(timedelta(hours=24))
    token = store.create({'a': 1})
    store.read(token)['a'] = 99
    assert store.read(token) == {'a': 1}


def _token(app, client):
    cookie = client.get_cookie(app.config['SESSION_COOKIE_NAME'])
    if cookie is None:
        return None
    return app.session_interface.get_signer(app).unsign(cookie.value).decode('utf-8')


def test_anonymous_visit_sets_no_cookie(app, client):
    client.get('/')
    assert client.get_cookie(app.config['SESSION_COOKIE_NAME']) is None
    assert len(app.session_interface.store) == 0


def test_login_sets_http_only_cookie_with_fixed_expiry(app, client, make_user, login):
    make_user('alice')
    login('alice')

    cookie = client.get_cookie(app.config['SESSION_COOKIE_NAME'])
    assert cookie is not None
    assert cookie.http_only
    token = _token(app, client)
    data = app.session_interface.store.read(token)
    assert data['user'] == {'id': 1, 'username': 'alice'}
    assert app.session_interface.store.expires_at(token) is not None


def test_login_allocates_a_new_token(app, client, make_user, login):
    make_user('alice')
    client.get('/dashboard')
    anonymous_token = _token(app, client)
    assert anonymous_token is not None

    login('alice')
    user_token = _token(app, client)
    assert user_token != anonymous_token
    assert app.session_interface.store.read(anonymous_token) is None


def test_logout_destroys_session(app, client, make_user, login):
    make_user('alice')
    login('alice')
    token = _token(app, client)

    r = client.get('/logout')
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/login')
    assert app.session_interface.store.read(token) is None
    assert client.get_cookie(app.config['SESSION_COOKIE_NAME']) is None

    r = client.get('/dashboard')
    assert r.headers['Location'].endswith('/login')


def test_tampered_cookie_is_ignored(app, client, make_user, login):
    make_user('alice')
    login('alice')
    token = _token(app, client)

    client.set_cookie(app.config['SESSION_COOKIE_NAME'], token + '.forged')
    r = client.get('/dashboard')
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/login')


def test_expired_session_is_anonymous(app, client, make_user, login):
    make_user('alice')
    login('alice')
    token = _token(app, client)
    app.session_interface.store.destroy(token)

    r = client.get('/dashboard')
    assert r.headers['Location'].endswith('/login')


def test_create_sweeps_expired_records():
    clock = FakeClock()
    store = MemorySessionStore(timedelta(hours=24), clock=clock)
    stale = store.create({'a': 1})

    clock.now += timedelta(hours=25)
    fresh = store.create({'b': 2})
    assert len(store) == 1
    assert store.expires_at(stale) is None
    assert store.read(fresh) == {'b': 2}


def test_anonymous_session_is_dropped_once_its_flash_is_shown(app, client):
    client.get('/dashboard')
    assert len(app.session_interface.store) == 1

    assert 'Please login to continue' in client.get('/login').get_data(as_text=True)
    assert len(app.session_interface.store) == 0
    assert client.get_cookie(app.config['SESSION_COOKIE_NAME']) is None
