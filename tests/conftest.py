"""Pytest configuration and fixtures."""

import os

# Settings are read on import, so the environment has to be in place first.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.api.dependencies import get_avatar_storage  # noqa: E402
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models import Idea, IdeaTag, Role, Tag, User  # noqa: E402
from src.services.auth import create_access_token, get_password_hash  # noqa: E402
from src.services.avatar_storage import AvatarStorage  # noqa: E402

ADMIN_ROLE_ID = 1
USER_ROLE_ID = 2
PASSWORD = "Password1"


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def avatar_storage(client, tmp_path):
    """Point avatar uploads at a temporary directory."""
    storage = AvatarStorage(tmp_path)
    app.dependency_overrides[get_avatar_storage] = lambda: storage
    return storage


@pytest.fixture
def roles(db):
    """Create the admin role and the regular user role."""
    admin = Role(id=ADMIN_ROLE_ID, name="Admin")
    regular = Role(id=USER_ROLE_ID, name="User")
    db.add_all([admin, regular])
    db.commit()
    return {"admin": admin, "user": regular}


@pytest.fixture
def make_user(db, roles):
    """Factory that inserts a user with the shared test password."""

    def _make_user(name: str, email: str, role_id: int = USER_ROLE_ID, profile_img: str = ""):
        user = User(
            name=name,
            email=email,
            password=get_password_hash(PASSWORD),
            role_id=role_id,
            profile_img=profile_img,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("Ada Admin", "admin@example.com", role_id=ADMIN_ROLE_ID)


@pytest.fixture
def alice(make_user):
    return make_user("Alice", "alice@example.com")


@pytest.fixture
def bob(make_user):
    return make_user("Bob", "bob@example.com")


def headers_for(user: User) -> AuthHeaders:
    """Bearer headers for a user, carrying its id."""
    token = create_access_token(user.id, user.role_id)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id)


@pytest.fixture
def admin_headers(admin):
    return headers_for(admin)


@pytest.fixture
def alice_headers(alice):
    return headers_for(alice)


@pytest.fixture
def bob_headers(bob):
    return headers_for(bob)


@pytest.fixture
def tags(db):
    """Three tags: Python (1), Rust (2), Go (3)."""
    created = [
        Tag(id=1, name="Python", description="Snakes and wheels"),
        Tag(id=2, name="Rust", description="Borrowed ideas"),
        Tag(id=3, name="Go", description=""),
    ]
    db.add_all(created)
    db.commit()
    return created


@pytest.fixture
def make_idea(db):
    """Factory that inserts an idea owned by ``owner`` with the given tag ids."""

    def _make_idea(owner: User, title: str = "Idea", tag_ids: tuple[int, ...] = (1,)):
        idea = Idea(
            title=title,
            content=f"{title} content",
            user_id=owner.id,
            tag_links=[IdeaTag(tag_id=tag_id) for tag_id in tag_ids],
        )
        db.add(idea)
        db.commit()
        db.refresh(idea)
        return idea

    return _make_idea


@pytest.fixture
def auth_for():
    """Build bearer headers for any user."""
    return headers_for
