import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from db import get_db, init_db, make_engine
from main import create_app
from models.user import User


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'algodeck-test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory):
    app = create_app(debug=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def make_user(session, email: str, name: str) -> User:
    user = User(email=email, name=name)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def alice(db_session):
    return make_user(db_session, "alice@example.com", "Alice")


@pytest.fixture
def bob(db_session):
    return make_user(db_session, "bob@example.com", "Bob")


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = app.state.identity_gate.create_access_token(user.id)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def as_alice(auth_headers, alice):
    return auth_headers(alice)


@pytest.fixture
def as_bob(auth_headers, bob):
    return auth_headers(bob)
