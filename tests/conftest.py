import pytest
import pytest_asyncio
from decimal import Decimal
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.main import app
from app import models  # noqa: F401
from app.database import Base, get_db
from app.core.auth import create_access_token, get_password_hash
from app.models.movie import MovieModel
from app.models.user import UserModel, Role
from app.services.token_blacklist_service import TokenBlacklist, get_token_blacklist

TEST_PASSWORD = "password123"
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def make_movie(db_session):
    def _make_movie(**fields):
        values = {
            "title": "Untitled",
            "adult": False,
            "vote_average": Decimal("5.0"),
            "vote_count": 100,
            "popularity": Decimal("1.0"),
            "release_year": 2000,
            "runtime": 100,
            "genres_list": "Drama",
            "director": "Jane Doe",
        }
        values.update(fields)
        movie = MovieModel(**values)
        db_session.add(movie)
        db_session.commit()
        db_session.refresh(movie)
        return movie

    return _make_movie


@pytest.fixture
def make_user(db_session):
    def _make_user(email: str, first_name: str = "Test", last_name: str = "User", role: Role = Role.USER):
        user = UserModel(
            email=email,
            password_hash=TEST_PASSWORD_HASH,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


def auth_headers(user: UserModel) -> dict:
    token = create_access_token(data={"sub": user.email, "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def blacklist():
    return TokenBlacklist()


@pytest_asyncio.fixture
async def client(db_session, blacklist):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_blacklist] = lambda: blacklist

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
