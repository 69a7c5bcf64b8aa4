"""User account service: registration, login, profile edits and lookups.

Every operation returns a Result and never raises. Business rejections carry
a specific message; storage failures are logged and reported with the
operation's fixed message, except login which hands back the raw exception.
"""

from attrs import define, field, validators

from podcaster.config import get_logger
from podcaster.domain.entities import (
    UNSET,
    Result,
    UnsetType,
    User,
    UserRole,
    unset_or,
)
from podcaster.domain.exceptions import EntityNotFoundError
from podcaster.domain.repositories import (
    PasswordHasherProtocol,
    TokenSignerProtocol,
    UnitOfWorkProtocol,
    UserRepositoryProtocol,
)

logger = get_logger(__name__)

EMAIL_TAKEN = "There is a user with that email already"
CREATE_ACCOUNT_FAILED = "Could not create account"
USER_NOT_FOUND = "User not found"
WRONG_PASSWORD = "Wrong password"
USER_LOOKUP_FAILED = "User Not Found"
UPDATE_PROFILE_FAILED = "Could not update profile"


@define(frozen=True, slots=True)
class CreateAccountInput:
    email: str = field(validator=validators.instance_of(str))
    password: str = field(validator=validators.instance_of(str), repr=False)
    role: UserRole = field(converter=UserRole)


@define(frozen=True, slots=True)
class LoginInput:
    email: str = field(validator=validators.instance_of(str))
    password: str = field(validator=validators.instance_of(str), repr=False)


@define(frozen=True, slots=True)
class EditProfileInput:
    """Partial profile update; fields left at UNSET are not touched."""

    email: str | UnsetType = field(default=UNSET, validator=unset_or(validators.instance_of(str)))
    password: str | UnsetType = field(
        default=UNSET, validator=unset_or(validators.instance_of(str)), repr=False
    )


class UserAccountService:
    """Application service for platform accounts."""

    def __init__(
        self,
        users: UserRepositoryProtocol,
        token_signer: TokenSignerProtocol,
        password_hasher: PasswordHasherProtocol,
    ) -> None:
        """Initialize with injected collaborators.

        Args:
            users: User repository; its save hashes freshly set passwords
            token_signer: Issues session tokens on successful login
            password_hasher: Capability used to check login passwords
        """
        self.users = users
        self.token_signer = token_signer
        self.password_hasher = password_hasher

    @classmethod
    def from_unit_of_work(
        cls,
        uow: UnitOfWorkProtocol,
        token_signer: TokenSignerProtocol,
        password_hasher: PasswordHasherProtocol,
    ) -> "UserAccountService":
        """Build a service whose repository shares the unit of work's session."""
        return cls(
            users=uow.get_user_repository(),
            token_signer=token_signer,
            password_hasher=password_hasher,
        )

    async def create_account(self, account: CreateAccountInput) -> Result[None]:
        """Register a new account unless the email is already taken."""
        try:
            existing = await self.users.find_one({"email": account.email})
            if existing is not None:
                return Result.fail(EMAIL_TAKEN)

            user = self.users.create(
                email=account.email,
                password=account.password,
                role=account.role,
            )
            await self.users.save(user)
        except Exception as e:
            logger.exception(f"Account creation failed: {e}")
            return Result.internal_error(CREATE_ACCOUNT_FAILED)

        logger.info("Account created", role=account.role.value)
        return Result.success()

    async def login(self, credentials: LoginInput) -> Result[str]:
        """Check credentials and issue a session token.

        Unexpected failures are reported with the raw exception attached as
        ``error.cause`` instead of a fixed message.
        """
        try:
            user = await self.users.find_one(
                {"email": credentials.email}, include_fields=["password"]
            )
            if user is None:
                return Result.fail(USER_NOT_FOUND)

            if not await user.check_password(credentials.password, self.password_hasher):
                return Result.fail(WRONG_PASSWORD)

            token = self.token_signer.sign(user.id)
        except Exception as e:
            logger.exception(f"Login failed unexpectedly: {e}")
            return Result.from_exception(e)

        logger.debug("Issued session token", user_id=user.id)
        return Result.success(token)

    async def find_by_id(self, user_id: int) -> Result[User]:
        """Look up an account by id."""
        try:
            user = await self.users.find_one_or_fail({"id": user_id})
        except EntityNotFoundError:
            return Result.fail(USER_LOOKUP_FAILED)
        except Exception as e:
            logger.exception(f"User lookup failed: {e}")
            return Result.internal_error(USER_LOOKUP_FAILED)

        return Result.success(user)

    async def edit_profile(self, user_id: int, changes: EditProfileInput) -> Result[None]:
        """Apply a partial email/password update to an account.

        A new password is hashed by the repository write; when the patch has
        no password the stored hash is left exactly as it was.
        """
        try:
            user = await self.users.find_one({"id": user_id})
            if user is None:
                return Result.fail(UPDATE_PROFILE_FAILED)

            await self.users.save(
                user.with_profile_changes(email=changes.email, password=changes.password)
            )
        except Exception as e:
            logger.exception(f"Profile update failed for user {user_id}: {e}")
            return Result.internal_error(UPDATE_PROFILE_FAILED)

        return Result.success()
