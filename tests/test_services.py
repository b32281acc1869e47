"""
Tests for service classes.
Tests authentication flows, ownership rules and enquiry business logic.
"""

import pytest
import uuid
from datetime import timedelta

from urbannest.models.user import User
from urbannest.models.property import Property, PropertyType
from urbannest.repositories.property import PropertyRepository
from urbannest.repositories.enquiry import EnquiryRepository
from urbannest.services.auth import AuthService
from urbannest.services.property import PropertyService
from urbannest.services.enquiry import EnquiryService
from urbannest.schemas.auth import SignupRequest
from urbannest.schemas.property import PropertyCreate, PropertyUpdate
from urbannest.schemas.enquiry import EnquiryCreate
from urbannest.utils.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    PropertyNotFoundError,
    PropertyUnavailableError,
    ValidationError,
)
from tests.conftest import PropertyFactory, EnquiryFactory, TEST_PASSWORD


class TestAuthService:
    """Test AuthService functionality."""

    @pytest.mark.asyncio
    async def test_signup_then_login(self, auth_service: AuthService):
        """Test a fresh signup can log in with the same credentials."""
        user, signup_token = await auth_service.signup(
            SignupRequest(email="fresh@example.com", password="s3cret", full_name="Fresh")
        )
        logged_in, login_token = await auth_service.login("fresh@example.com", "s3cret")

        assert logged_in.id == user.id
        assert signup_token != login_token
        assert (await auth_service.resolve_session(signup_token)).id == user.id
        assert (await auth_service.resolve_session(login_token)).id == user.id

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, auth_service: AuthService, test_landlord: User):
        """Test signing up twice with one email fails."""
        with pytest.raises(DuplicateEmailError):
            await auth_service.signup(SignupRequest(email=test_landlord.email, password="another"))

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, auth_service: AuthService, test_landlord: User):
        """Test login with a wrong password."""
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await auth_service.login(test_landlord.email, "wrongpassword")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, auth_service: AuthService):
        """Test login with an unknown email gives the same error."""
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await auth_service.login("ghost@example.com", TEST_PASSWORD)

        assert exc_info.value.detail == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_purges_expired_sessions(self, auth_service: AuthService, test_landlord: User):
        """Test expired sessions are cleaned up on login."""
        await auth_service.session_repo.create_session(test_landlord.id, timedelta(seconds=-1))

        await auth_service.login(test_landlord.email, TEST_PASSWORD)

        assert await auth_service.session_repo.count() == 1

    @pytest.mark.asyncio
    async def test_logout_invalidates_session(self, auth_service: AuthService, test_landlord: User):
        """Test a logged-out token no longer resolves."""
        _, token = await auth_service.login(test_landlord.email, TEST_PASSWORD)

        assert await auth_service.logout(token) is True
        assert await auth_service.resolve_session(token) is None

    @pytest.mark.asyncio
    async def test_logout_without_token(self, auth_service: AuthService):
        """Test logging out anonymously is a no-op."""
        assert await auth_service.logout(None) is False

    @pytest.mark.asyncio
    async def test_resolve_session_expired(self, db_session, test_landlord: User):
        """Test a session past its lifetime resolves to nobody."""
        short_lived = AuthService(db_session, session_ttl=timedelta(seconds=-1))
        _, token = await short_lived.login(test_landlord.email, TEST_PASSWORD)

        assert await short_lived.resolve_session(token) is None

    @pytest.mark.asyncio
    async def test_resolve_session_missing_token(self, auth_service: AuthService):
        """Test resolving without a token."""
        assert await auth_service.resolve_session(None) is None
        assert await auth_service.resolve_session("") is None


class TestPropertyService:
    """Test PropertyService functionality."""

    @pytest.mark.asyncio
    async def test_get_property(self, property_service: PropertyService, test_property: Property):
        """Test getting a property by its string id."""
        property_obj = await property_service.get_property(str(test_property.id))
        assert property_obj.id == test_property.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["not-a-uuid", "123", ""])
    async def test_get_property_malformed_id(self, property_service: PropertyService, bad_id: str):
        """Test a malformed id is reported as not found."""
        with pytest.raises(PropertyNotFoundError) as exc_info:
            await property_service.get_property(bad_id)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Property not found"

    @pytest.mark.asyncio
    async def test_get_similar_properties_missing_reference(self, property_service: PropertyService):
        """Test similar listings for an unknown property."""
        with pytest.raises(PropertyNotFoundError):
            await property_service.get_similar_properties(str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_get_similar_properties(
        self,
        property_service: PropertyService,
        property_repository: PropertyRepository,
        test_landlord: User
    ):
        """Test similar listings share the reference's type."""
        reference = await PropertyFactory.create_property(
            property_repository, test_landlord.id, property_type=PropertyType.ROOM
        )
        match = await PropertyFactory.create_property(
            property_repository, test_landlord.id, property_type=PropertyType.ROOM
        )
        await PropertyFactory.create_property(
            property_repository, test_landlord.id, property_type=PropertyType.APARTMENT
        )

        similar = await property_service.get_similar_properties(str(reference.id))

        assert [p.id for p in similar] == [match.id]

    @pytest.mark.asyncio
    async def test_create_property(self, property_service: PropertyService, test_landlord: User):
        """Test creating a property from a validated payload."""
        payload = PropertyCreate.model_validate(PropertyFactory.create_property_payload(userId=str(uuid.uuid4())))

        property_obj = await property_service.create_property(test_landlord, payload)

        assert property_obj.user_id == test_landlord.id
        assert property_obj.type == PropertyType.APARTMENT
        assert property_obj.landlord_phone == "+254700000002"

    @pytest.mark.asyncio
    async def test_update_property_partial(
        self,
        property_service: PropertyService,
        test_property: Property,
        test_landlord: User
    ):
        """Test only the fields sent are changed."""
        updated = await property_service.update_property(
            str(test_property.id), test_landlord, PropertyUpdate.model_validate({"price": 18000})
        )

        assert updated.price == 18000
        assert updated.location == test_property.location
        assert updated.description == test_property.description

    @pytest.mark.asyncio
    async def test_update_property_empty_body(
        self,
        property_service: PropertyService,
        test_property: Property,
        test_landlord: User
    ):
        """Test an update that changes nothing is rejected."""
        with pytest.raises(ValidationError):
            await property_service.update_property(str(test_property.id), test_landlord, PropertyUpdate())

    @pytest.mark.asyncio
    async def test_update_property_non_owner(
        self,
        property_service: PropertyService,
        test_property: Property,
        other_landlord: User
    ):
        """Test a non-owner is told the property does not exist."""
        with pytest.raises(PropertyNotFoundError) as exc_info:
            await property_service.update_property(
                str(test_property.id), other_landlord, PropertyUpdate(title="Hijacked")
            )

        assert exc_info.value.detail == "Property not found or not authorized"

    @pytest.mark.asyncio
    async def test_delete_property_non_owner(
        self,
        property_service: PropertyService,
        test_property: Property,
        other_landlord: User
    ):
        """Test a non-owner cannot delete."""
        with pytest.raises(PropertyNotFoundError):
            await property_service.delete_property(str(test_property.id), other_landlord)

        assert await property_service.get_property(str(test_property.id)) is not None

    @pytest.mark.asyncio
    async def test_delete_property_malformed_id(self, property_service: PropertyService, test_landlord: User):
        """Test deleting by a malformed id."""
        with pytest.raises(PropertyNotFoundError):
            await property_service.delete_property("nope", test_landlord)


class TestEnquiryService:
    """Test EnquiryService functionality."""

    @pytest.mark.asyncio
    async def test_create_enquiry(self, enquiry_service: EnquiryService, test_property: Property):
        """Test creating an enquiry for an available property."""
        enquiry = await enquiry_service.create_enquiry(
            EnquiryCreate(property_id=test_property.id, name="  Amina ", phone="0712345678")
        )

        assert enquiry.property_id == test_property.id
        assert enquiry.name == "Amina"
        assert enquiry.whatsapp is False
        assert enquiry.message is None

    @pytest.mark.asyncio
    async def test_create_enquiry_unavailable(
        self,
        enquiry_service: EnquiryService,
        property_repository: PropertyRepository,
        test_landlord: User
    ):
        """Test an unavailable property gives a domain error."""
        let_out = await PropertyFactory.create_property(
            property_repository, test_landlord.id, available=False
        )

        with pytest.raises(PropertyUnavailableError) as exc_info:
            await enquiry_service.create_enquiry(
                EnquiryCreate(property_id=let_out.id, name="Amina", phone="0712345678")
            )

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Property not found or not available"

    @pytest.mark.asyncio
    async def test_create_enquiry_missing_property(self, enquiry_service: EnquiryService):
        """Test a missing property gives the same domain error."""
        with pytest.raises(PropertyUnavailableError):
            await enquiry_service.create_enquiry(
                EnquiryCreate(property_id=uuid.uuid4(), name="Amina", phone="0712345678")
            )

    @pytest.mark.asyncio
    async def test_list_owner_enquiries(
        self,
        enquiry_service: EnquiryService,
        enquiry_repository: EnquiryRepository,
        property_repository: PropertyRepository,
        test_landlord: User,
        other_landlord: User
    ):
        """Test owners only see enquiries on their own properties."""
        mine = await PropertyFactory.create_property(property_repository, test_landlord.id)
        theirs = await PropertyFactory.create_property(property_repository, other_landlord.id)
        my_enquiry = await EnquiryFactory.create_enquiry(enquiry_repository, mine.id)
        await EnquiryFactory.create_enquiry(enquiry_repository, theirs.id)

        enquiries = await enquiry_service.list_owner_enquiries(test_landlord)

        assert [e.id for e in enquiries] == [my_enquiry.id]

    @pytest.mark.asyncio
    async def test_list_owner_enquiries_without_properties(
        self,
        enquiry_service: EnquiryService,
        other_landlord: User
    ):
        """Test an owner with no properties sees no enquiries."""
        assert await enquiry_service.list_owner_enquiries(other_landlord) == []
