from typely.models import User
from typely.services import verify_password


def test_init_db(runner):
    result = runner.invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Database tables created' in result.output


def test_create_admin(app, runner, client):
    result = runner.invoke(args=['create-admin', '--username', 'root',
                                 '--email', 'root@example.com', '--password', 'secret1'])
    assert result.exit_code == 0
    assert 'New admin user created' in result.output

    r = client.post('/admin/login', data={'email': 'root@example.com', 'password': 'secret1'})
    assert r.headers['Location'].endswith('/admin')


def test_create_admin_promotes_existing_user(app, runner, make_user):
    make_user('alice')
    result = runner.invoke(args=['create-admin', '--username', 'alice',
                                 '--email', 'alice@example.com', '--password', 'new-secret'])
    assert result.exit_code == 0
    assert 'Existing user promoted to admin' in result.output

    with app.app_context():
        user = User.query.filter_by(email='alice@example.com').one()
        assert user.role == 'admin'
        assert verify_password('new-secret', user.password_hash)
