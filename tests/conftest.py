"""
Test configuration and fixtures for the UrbanNest API.
Provides database fixtures, test data factories, and common test utilities.
"""

import io
import pytest
import uuid
from typing import AsyncGenerator, Callable, List, Optional
from httpx import AsyncClient, ASGITransport
from PIL import Image
from sqlalchemy.ext.asyncio import AsyncSession

from urbannest.config import Settings
from urbannest.database import Database
from urbannest.main import create_app
from urbannest.models.user import User
from urbannest.models.property import Property, PropertyType
from urbannest.models.enquiry import Enquiry
from urbannest.repositories.user import UserRepository
from urbannest.repositories.session import SessionRepository
from urbannest.repositories.property import PropertyRepository
from urbannest.repositories.enquiry import EnquiryRepository
from urbannest.services.auth import AuthService
from urbannest.services.property import PropertyService
from urbannest.services.enquiry import EnquiryService
from urbannest.utils.file_utils import FileStorage


TEST_PASSWORD = "testpassword123"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings for an isolated test application."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        upload_dir=str(tmp_path / "uploads"),
        create_tables_on_startup=False,
        cors_origins=["http://test"],
    )


@pytest.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """A fresh SQLite database file per test with all tables created."""
    db = Database(test_settings.database_url)
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.dispose()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def storage(test_settings: Settings) -> FileStorage:
    """File storage rooted in the test's temporary directory."""
    return FileStorage(
        test_settings.upload_dir,
        url_path=test_settings.uploads_url_path,
        public_base_url=test_settings.public_base_url
    )


@pytest.fixture
def app(test_settings: Settings, database: Database, storage: FileStorage):
    """Application wired to the test database and storage."""
    return create_app(test_settings, database=database, storage=storage)


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def client_factory(app) -> AsyncGenerator[Callable[[], AsyncClient], None]:
    """Create extra clients with their own cookie jars, e.g. for a second user."""
    clients: List[AsyncClient] = []

    def make_client() -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield make_client

    for client in clients:
        await client.aclose()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(db_session)


@pytest.fixture
def session_repository(db_session: AsyncSession) -> SessionRepository:
    """Create a session repository instance."""
    return SessionRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(db_session)


@pytest.fixture
def enquiry_repository(db_session: AsyncSession) -> EnquiryRepository:
    """Create an enquiry repository instance."""
    return EnquiryRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    """Create an auth service instance."""
    return AuthService(db_session)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    """Create a property service instance."""
    return PropertyService(db_session)


@pytest.fixture
def enquiry_service(db_session: AsyncSession) -> EnquiryService:
    """Create an enquiry service instance."""
    return EnquiryService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        full_name: Optional[str] = "Test User",
        phone: Optional[str] = "+254700000001"
    ) -> dict:
        """Create user data dictionary."""
        return {
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "full_name": full_name,
            "phone": phone
        }

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        full_name: Optional[str] = "Test User",
        phone: Optional[str] = "+254700000001"
    ) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(
            **UserFactory.create_user_data(email, password, full_name, phone)
        )


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Test Property",
        property_type: PropertyType = PropertyType.APARTMENT,
        price: int = 15000,
        location: str = "Kilimani, Nairobi",
        bedrooms: int = 2,
        bathrooms: int = 1,
        description: Optional[str] = "A bright test property",
        features: Optional[List[str]] = None,
        images: Optional[List[str]] = None,
        available: bool = True,
        landlord_phone: str = "+254700000002"
    ) -> dict:
        """Create property data dictionary using model field names."""
        return {
            "title": title,
            "type": property_type,
            "price": price,
            "location": location,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "description": description,
            "features": features if features is not None else ["Parking", "WiFi"],
            "images": images if images is not None else [],
            "available": available,
            "landlord_phone": landlord_phone
        }

    @staticmethod
    def create_property_payload(**overrides) -> dict:
        """Create a camelCase JSON body for POST /api/properties."""
        payload = {
            "title": "Test Property",
            "type": "apartment",
            "price": 15000,
            "location": "Kilimani, Nairobi",
            "bedrooms": 2,
            "bathrooms": 1,
            "description": "A bright test property",
            "features": ["Parking", "WiFi"],
            "images": [],
            "available": True,
            "landlordPhone": "+254700000002"
        }
        payload.update(overrides)
        return payload

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        owner_id: uuid.UUID,
        **kwargs
    ) -> Property:
        """Create a test property in the database."""
        property_data = PropertyFactory.create_property_data(**kwargs)
        return await property_repo.create_property(owner_id, property_data)


class EnquiryFactory:
    """Factory for creating test enquiries."""

    @staticmethod
    def create_enquiry_data(
        property_id: uuid.UUID,
        name: str = "Test Tenant",
        phone: str = "+254711111111",
        whatsapp: bool = False,
        message: Optional[str] = "Is this still available?"
    ) -> dict:
        """Create enquiry data dictionary."""
        return {
            "property_id": property_id,
            "name": name,
            "phone": phone,
            "whatsapp": whatsapp,
            "message": message
        }

    @staticmethod
    async def create_enquiry(
        enquiry_repo: EnquiryRepository,
        property_id: uuid.UUID,
        **kwargs
    ) -> Optional[Enquiry]:
        """Create a test enquiry in the database."""
        return await enquiry_repo.create_for_available_property(
            EnquiryFactory.create_enquiry_data(property_id, **kwargs)
        )


def make_image_bytes(image_format: str = "JPEG", size=(8, 8)) -> bytes:
    """Encode a tiny real image with Pillow."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 120, 40)).save(buffer, format=image_format)
    return buffer.getvalue()


# Common test fixtures
@pytest.fixture
async def test_landlord(user_repository: UserRepository) -> User:
    """Create a test landlord user."""
    return await UserFactory.create_user(
        user_repository,
        email="landlord@test.com",
        full_name="Test Landlord"
    )


@pytest.fixture
async def other_landlord(user_repository: UserRepository) -> User:
    """Create a second landlord who owns nothing of the first one's."""
    return await UserFactory.create_user(
        user_repository,
        email="other@test.com",
        full_name="Other Landlord"
    )


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_landlord: User) -> Property:
    """Create an available test property owned by test_landlord."""
    return await PropertyFactory.create_property(property_repository, test_landlord.id)


async def signup_client(
    client: AsyncClient,
    email: Optional[str] = None,
    password: str = TEST_PASSWORD
) -> dict:
    """Sign a client up through the API; the client keeps the session cookie."""
    response = await client.post(
        "/api/auth/signup",
        json={
            "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "fullName": "API User",
            "phone": "+254722222222"
        }
    )
    assert response.status_code == 200, response.text
    return response.json()["user"]


@pytest.fixture
async def authenticated_client(async_client: AsyncClient) -> AsyncClient:
    """The default client, logged in as a freshly signed-up user."""
    await signup_client(async_client, email="owner@example.com")
    return async_client


# Helper functions for tests
def assert_user_equal(user1: User, user2: User):
    """Assert that two users are equal."""
    assert user1.id == user2.id
    assert user1.email == user2.email
    assert user1.full_name == user2.full_name
    assert user1.phone == user2.phone


def assert_property_equal(prop1: Property, prop2: Property):
    """Assert that two properties are equal."""
    assert prop1.id == prop2.id
    assert prop1.title == prop2.title
    assert prop1.type == prop2.type
    assert prop1.price == prop2.price
    assert prop1.location == prop2.location
    assert prop1.user_id == prop2.user_id
    assert prop1.available == prop2.available
