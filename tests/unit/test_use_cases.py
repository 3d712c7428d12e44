"""Use-case tests with AsyncMock repositories (no database)."""

from unittest.mock import AsyncMock

import pytest

from accounts.application.dtos.pagination import (
    PaginatedResults,
    PaginationMeta,
    PaginationParams,
)
from accounts.application.dtos.user import (
    DeleteUserCommand,
    GetUserProfileQuery,
    ListUsersQuery,
    LoginUserCommand,
    RegisterUserCommand,
)
from accounts.application.interfaces.repositories import UserWithAuthentication
from accounts.application.use_cases import (
    DeleteUserUseCase,
    GetUserProfileUseCase,
    ListUsersUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    UseCaseKind,
    Visibility,
    execute_use_case,
)
from accounts.application.use_cases.register_user import validate_password_strength
from accounts.domain.entities import UserAuthentication
from accounts.domain.exceptions import (
    AuthenticationDomainError,
    AuthorizationDomainError,
    ConflictDomainError,
    NotFoundDomainError,
    ValidationDomainError,
)

HASH = "$2b$04$" + "h" * 53


def _register_command(**overrides) -> RegisterUserCommand:
    fields = {
        "email": "Ada@Example.com",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "password": "Str0ngPassw0rd",
    }
    fields.update(overrides)
    return RegisterUserCommand(**fields)


def _page(items, page: int = 1, page_size: int = 500) -> PaginatedResults:
    return PaginatedResults(
        data=list(items),
        meta=PaginationMeta(total=len(items), page=page, page_size=page_size),
    )


class TestDescriptors:
    @pytest.mark.parametrize(
        ("use_case", "kind", "visibility"),
        [
            (RegisterUserUseCase, UseCaseKind.WRITE, Visibility.PUBLIC),
            (LoginUserUseCase, UseCaseKind.WRITE, Visibility.PUBLIC),
            (GetUserProfileUseCase, UseCaseKind.READ, Visibility.PRIVATE),
            (DeleteUserUseCase, UseCaseKind.WRITE, Visibility.PRIVATE),
            (ListUsersUseCase, UseCaseKind.READ, Visibility.PRIVATE),
        ],
    )
    def test_static_descriptor(self, use_case, kind, visibility) -> None:
        assert use_case.descriptor.kind is kind
        assert use_case.descriptor.visibility is visibility


class TestPasswordStrength:
    @pytest.mark.parametrize(
        "password",
        ["short1A", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere", "", "A1" + "a" * 127],
    )
    def test_weak_passwords_rejected(self, password: str) -> None:
        errors = validate_password_strength(password)
        assert errors
        assert {e.field for e in errors} == {"password"}

    def test_strong_password_accepted(self) -> None:
        assert validate_password_strength("Str0ngPassw0rd") == []

    def test_reports_every_violation(self) -> None:
        assert len(validate_password_strength("abc")) == 3


class TestRegisterUser:
    async def test_registers_user_and_email_authentication(self, fake_app, make_user) -> None:
        users = fake_app.users
        users.find_by_email.return_value = None
        users.create.return_value = make_user(id="new-id")
        fake_app.password_hasher.hash.return_value = HASH
        context = fake_app.create_request_context("r1")

        result = await execute_use_case(RegisterUserUseCase(), context, _register_command())

        assert result.message == "User registered successfully"
        assert result.user.id == "new-id"
        users.find_by_email.assert_awaited_once_with("ada@example.com")
        assert users.create.await_args.args[0].email == "ada@example.com"
        fake_app.password_hasher.hash.assert_awaited_once_with("Str0ngPassw0rd")
        authentication: UserAuthentication = users.create_authentication.await_args.args[0]
        assert authentication.user_id == "new-id"
        assert authentication.provider_id == "ada@example.com"
        assert authentication.hashed_password == HASH
        assert fake_app.transactions_opened == 1

    async def test_password_hashed_before_first_write(self, fake_app, make_user) -> None:
        calls: list[str] = []
        fake_app.users.find_by_email.return_value = None

        async def _hash(password: str) -> str:
            calls.append("hash")
            return HASH

        async def _create(user):
            calls.append("create")
            return make_user(id="new-id")

        fake_app.password_hasher.hash.side_effect = _hash
        fake_app.users.create.side_effect = _create
        context = fake_app.create_request_context("r1")

        await execute_use_case(RegisterUserUseCase(), context, _register_command())

        assert calls == ["hash", "create"]

    async def test_weak_password_is_validation_error(self, fake_app) -> None:
        context = fake_app.create_request_context("r1")
        with pytest.raises(ValidationDomainError) as excinfo:
            await execute_use_case(
                RegisterUserUseCase(), context, _register_command(password="weak")
            )
        assert "password" in {e.field for e in excinfo.value.field_errors}
        fake_app.users.create.assert_not_awaited()

    async def test_all_missing_fields_reported(self, fake_app) -> None:
        context = fake_app.create_request_context("r1")
        with pytest.raises(ValidationDomainError) as excinfo:
            await execute_use_case(
                RegisterUserUseCase(),
                context,
                RegisterUserCommand(email=None, first_name=None, last_name="", password=None),
            )
        assert {e.field for e in excinfo.value.field_errors} == {
            "email",
            "first_name",
            "last_name",
            "password",
        }

    async def test_duplicate_email_is_conflict(self, fake_app, make_user) -> None:
        fake_app.users.find_by_email.return_value = make_user()
        context = fake_app.create_request_context("r1")
        with pytest.raises(ConflictDomainError, match="already exists"):
            await execute_use_case(RegisterUserUseCase(), context, _register_command())
        fake_app.users.create.assert_not_awaited()


class TestLoginUser:
    def _found(self, make_user, **auth_overrides) -> UserWithAuthentication:
        fields = {
            "id": "auth-1",
            "user_id": "user-1",
            "provider": "email",
            "provider_id": "ada@example.com",
            "hashed_password": HASH,
            "is_active": True,
        }
        fields.update(auth_overrides)
        return UserWithAuthentication(
            user=make_user(), authentication=UserAuthentication.from_data(**fields)
        )

    async def test_success(self, fake_app, make_user) -> None:
        fake_app.users.find_user_with_authentication.return_value = self._found(make_user)
        fake_app.password_hasher.verify.return_value = True
        context = fake_app.create_request_context("r1")

        result = await execute_use_case(
            LoginUserUseCase(),
            context,
            LoginUserCommand(email=" ADA@example.com ", password="Str0ngPassw0rd"),
        )

        assert result.message == "Login successful"
        assert result.user.email == "ada@example.com"
        fake_app.users.find_user_with_authentication.assert_awaited_once_with(
            "ada@example.com", "email"
        )

    async def test_unknown_email_burns_dummy_verify(self, fake_app) -> None:
        fake_app.users.find_user_with_authentication.return_value = None
        context = fake_app.create_request_context("r1")
        with pytest.raises(AuthenticationDomainError, match="^Invalid email or password$"):
            await execute_use_case(
                LoginUserUseCase(),
                context,
                LoginUserCommand(email="nobody@example.com", password="whatever"),
            )
        fake_app.password_hasher.verify_dummy.assert_awaited_once_with("whatever")

    async def test_wrong_password_has_same_message(self, fake_app, make_user) -> None:
        fake_app.users.find_user_with_authentication.return_value = self._found(make_user)
        fake_app.password_hasher.verify.return_value = False
        context = fake_app.create_request_context("r1")
        with pytest.raises(AuthenticationDomainError, match="^Invalid email or password$"):
            await execute_use_case(
                LoginUserUseCase(),
                context,
                LoginUserCommand(email="ada@example.com", password="Wr0ngPassword"),
            )

    @pytest.mark.parametrize(
        ("user_overrides", "auth_overrides"),
        [
            ({}, {"is_active": False}),
            ({"is_active": False}, {}),
            ({}, {"hashed_password": None}),
        ],
        ids=["inactive-authentication", "inactive-user", "no-password"],
    )
    async def test_rejected_account_burns_dummy_verify(
        self, fake_app, make_user, user_overrides, auth_overrides
    ) -> None:
        found = self._found(make_user, **auth_overrides)
        fake_app.users.find_user_with_authentication.return_value = UserWithAuthentication(
            user=make_user(**user_overrides), authentication=found.authentication
        )
        fake_app.password_hasher.verify.return_value = True
        context = fake_app.create_request_context("r1")
        with pytest.raises(AuthenticationDomainError, match="^Invalid email or password$"):
            await execute_use_case(
                LoginUserUseCase(),
                context,
                LoginUserCommand(email="ada@example.com", password="Str0ngPassw0rd"),
            )
        fake_app.password_hasher.verify_dummy.assert_awaited_once_with("Str0ngPassw0rd")
        fake_app.password_hasher.verify.assert_not_awaited()

    async def test_malformed_command(self, fake_app) -> None:
        context = fake_app.create_request_context("r1")
        with pytest.raises(ValidationDomainError) as excinfo:
            await execute_use_case(
                LoginUserUseCase(), context, LoginUserCommand(email="nope", password="")
            )
        assert {e.field for e in excinfo.value.field_errors} == {"email", "password"}


class TestGetUserProfile:
    async def test_own_profile(self, fake_app, make_user) -> None:
        fake_app.users.find_by_id.return_value = make_user(id="u1")
        context = fake_app.create_request_context("r1")
        context.attach_user("u1")
        result = await execute_use_case(
            GetUserProfileUseCase(), context, GetUserProfileQuery(user_id="u1")
        )
        assert result.user.id == "u1"

    async def test_requires_identity(self, fake_app) -> None:
        context = fake_app.create_request_context("r1")
        with pytest.raises(AuthenticationDomainError, match="Authentication required"):
            await execute_use_case(
                GetUserProfileUseCase(), context, GetUserProfileQuery(user_id="u1")
            )

    async def test_other_profile_denied_before_lookup(self, fake_app) -> None:
        context = fake_app.create_request_context("r1")
        context.attach_user("u1")
        with pytest.raises(AuthorizationDomainError, match="can only access own profile"):
            await execute_use_case(
                GetUserProfileUseCase(), context, GetUserProfileQuery(user_id="u2")
            )
        fake_app.users.find_by_id.assert_not_awaited()

    async def test_missing_user_is_not_found(self, fake_app) -> None:
        fake_app.users.find_by_id.return_value = None
        context = fake_app.create_request_context("r1")
        context.attach_user("u1")
        with pytest.raises(NotFoundDomainError):
            await execute_use_case(
                GetUserProfileUseCase(), context, GetUserProfileQuery(user_id="u1")
            )

    async def test_inactive_account_denied(self, fake_app, make_user) -> None:
        fake_app.users.find_by_id.return_value = make_user(id="u1", is_active=False)
        context = fake_app.create_request_context("r1")
        context.attach_user("u1")
        with pytest.raises(AuthorizationDomainError, match="Account is not active"):
            await execute_use_case(
                GetUserProfileUseCase(), context, GetUserProfileQuery(user_id="u1")
            )


class TestDeleteUser:
    def _users_by_id(self, fake_app, **users) -> None:
        fake_app.users.find_by_id.side_effect = lambda user_id: users.get(user_id)

    async def test_self_delete_removes_authentications_then_user(
        self, fake_app, make_user
    ) -> None:
        self._users_by_id(fake_app, u1=make_user(id="u1"))
        authentication = UserAuthentication.from_data(
            id="a1",
            user_id="u1",
            provider="email",
            provider_id="ada@example.com",
            hashed_password=HASH,
            is_active=True,
        )
        fake_app.users.find_authentication_by_user_id.side_effect = [
            _page([authentication]),
            _page([]),
        ]
        context = fake_app.create_request_context("r1")
        context.attach_user("u1")

        result = await execute_use_case(
            DeleteUserUseCase(), context, DeleteUserCommand(user_id="u1")
        )

        assert result.message == "User deleted successfully"
        fake_app.users.delete_authentication.assert_awaited_once_with("a1")
        fake_app.users.delete.assert_awaited_once_with("u1")
        pagination = fake_app.users.find_authentication_by_user_id.await_args.kwargs[
            "pagination"
        ]
        assert pagination == PaginationParams(page=1, page_size=500)

    async def test_admin_may_delete_anyone(self, fake_app, make_user) -> None:
        self._users_by_id(
            fake_app, admin=make_user(id="admin", is_admin=True), u2=make_user(id="u2")
        )
        fake_app.users.find_authentication_by_user_id.return_value = _page([])
        context = fake_app.create_request_context("r1")
        context.attach_user("admin")
        await execute_use_case(DeleteUserUseCase(), context, DeleteUserCommand(user_id="u2"))
        fake_app.users.delete.assert_awaited_once_with("u2")

    async def test_non_admin_may_not_delete_others(self, fake_app, make_user) -> None:
        self._users_by_id(fake_app, u1=make_user(id="u1"), u2=make_user(id="u2"))
        context = fake_app.create_request_context("r1")
        context.attach_user("u1")
        with pytest.raises(AuthorizationDomainError, match="permission to delete"):
            await execute_use_case(
                DeleteUserUseCase(), context, DeleteUserCommand(user_id="u2")
            )
        fake_app.users.delete.assert_not_awaited()

    async def test_missing_target_is_not_found(self, fake_app, make_user) -> None:
        self._users_by_id(fake_app, admin=make_user(id="admin", is_admin=True))
        context = fake_app.create_request_context("r1")
        context.attach_user("admin")
        with pytest.raises(NotFoundDomainError):
            await execute_use_case(
                DeleteUserUseCase(), context, DeleteUserCommand(user_id="ghost")
            )

    async def test_vanished_caller_is_invalid_session(self, fake_app) -> None:
        self._users_by_id(fake_app)
        context = fake_app.create_request_context("r1")
        context.attach_user("gone")
        with pytest.raises(AuthenticationDomainError, match="Invalid user session"):
            await execute_use_case(
                DeleteUserUseCase(), context, DeleteUserCommand(user_id="gone")
            )

    async def test_blank_user_id_is_validation_error(self, fake_app) -> None:
        context = fake_app.create_request_context("r1")
        context.attach_user("u1")
        with pytest.raises(ValidationDomainError):
            await execute_use_case(
                DeleteUserUseCase(), context, DeleteUserCommand(user_id="  ")
            )


class TestListUsers:
    async def test_admin_lists_page(self, fake_app, make_user) -> None:
        fake_app.users.find_by_id.return_value = make_user(id="admin", is_admin=True)
        fake_app.users.find_many.return_value = PaginatedResults(
            data=[make_user(id="u1"), make_user(id="u2")],
            meta=PaginationMeta(total=12, page=2, page_size=5),
        )
        context = fake_app.create_request_context("r1")
        context.attach_user("admin")

        query = ListUsersQuery(pagination=PaginationParams(page=2, page_size=5))
        result = await execute_use_case(ListUsersUseCase(), context, query)

        assert [u.id for u in result.users] == ["u1", "u2"]
        assert result.meta.total_pages == 3
        assert result.meta.has_next and result.meta.has_prev
        fake_app.users.find_many.assert_awaited_once_with(query.pagination)

    @pytest.mark.parametrize(
        ("page", "page_size", "fields"),
        [
            (0, 20, {"page"}),
            (1, 0, {"page_size"}),
            (1, 501, {"page_size"}),
            (-1, 1000, {"page", "page_size"}),
        ],
    )
    async def test_pagination_is_validated_not_clamped(
        self, fake_app, page, page_size, fields
    ) -> None:
        context = fake_app.create_request_context("r1")
        context.attach_user("admin")
        with pytest.raises(ValidationDomainError) as excinfo:
            await execute_use_case(
                ListUsersUseCase(),
                context,
                ListUsersQuery(pagination=PaginationParams(page=page, page_size=page_size)),
            )
        assert {e.field for e in excinfo.value.field_errors} == fields
        fake_app.users.find_many.assert_not_awaited()

    async def test_non_admin_denied(self, fake_app, make_user) -> None:
        fake_app.users.find_by_id.return_value = make_user(id="u1")
        context = fake_app.create_request_context("r1")
        context.attach_user("u1")
        with pytest.raises(AuthorizationDomainError, match="admin privileges required"):
            await execute_use_case(ListUsersUseCase(), context, ListUsersQuery())

    async def test_inactive_admin_denied(self, fake_app, make_user) -> None:
        fake_app.users.find_by_id.return_value = make_user(
            id="admin", is_admin=True, is_active=False
        )
        context = fake_app.create_request_context("r1")
        context.attach_user("admin")
        with pytest.raises(AuthorizationDomainError, match="Account is not active"):
            await execute_use_case(ListUsersUseCase(), context, ListUsersQuery())

    async def test_anonymous_denied(self, fake_app) -> None:
        context = fake_app.create_request_context("r1")
        with pytest.raises(AuthenticationDomainError):
            await execute_use_case(ListUsersUseCase(), context, ListUsersQuery())


async def test_execute_use_case_logs_domain_failures(fake_app, caplog) -> None:
    fake_app.users.find_by_email = AsyncMock(side_effect=ConflictDomainError("Taken"))
    context = fake_app.create_request_context("req-42")
    with caplog.at_level("INFO", logger="tests.accounts"):
        with pytest.raises(ConflictDomainError):
            await execute_use_case(RegisterUserUseCase(), context, _register_command())
    assert "[req-42] RegisterUserUseCase failed: CONFLICT (Taken)" in caplog.text
