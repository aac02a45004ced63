from sqlalchemy.exc import SQLAlchemyError

from typely.models import ContactMessage


def test_contact_message_is_stored(app, client):
    r = client.post('/contact', data={'name': 'Ann', 'email': 'ann@example.com', 'message': 'Hi there'})
    assert r.status_code == 200
    assert r.get_json() == {'success': True, 'message': 'Message sent successfully!'}

    with app.app_context():
        stored = ContactMessage.query.one()
        assert (stored.name, stored.email, stored.message) == ('Ann', 'ann@example.com', 'Hi there')
        assert stored.created_at is not None


def test_contact_accepts_json_body(app, client):
    r = client.post('/contact', json={'name': 'Ann', 'email': 'ann@example.com', 'message': 'Hi'})
    assert r.get_json()['success'] is True
    with app.app_context():
        assert ContactMessage.query.count() == 1


def test_contact_validation_failure_is_still_200(app, client):
    r = client.post('/contact', data={'name': 'Ann', 'email': 'ann@example.com'})
    assert r.status_code == 200
    assert r.get_json() == {'success': False, 'error': 'All fields are required'}
    with app.app_context():
        assert ContactMessage.query.count() == 0


def test_contact_database_failure_is_still_200(client, monkeypatch):
    def broken(name, email, message):
        raise SQLAlchemyError('insert failed')

    monkeypatch.setattr('typely.blog.routes.save_contact_message', broken)
    r = client.post('/contact', data={'name': 'Ann', 'email': 'ann@example.com', 'message': 'Hi'})
    assert r.status_code == 200
    assert r.get_json() == {'success': False, 'error': 'Server error while sending message'}
