import pytest

from api.features.users.entities.user import User
from api.shared.exceptions import ConflictError, NotFoundError, ValidationError
from tests.conftest import FAKE_HASH, FAKE_SALT


async def test_created_account_exists_in_any_casing(accounts):
    account_id = await accounts.create_account("Alice", FAKE_HASH, FAKE_SALT)

    assert account_id > 0
    assert await accounts.account_exists("Alice")
    assert await accounts.account_exists("alice")
    assert await accounts.account_exists("ALICE")
    assert not await accounts.account_exists("bob")


async def test_username_casing_is_kept(accounts):
    account_id = await accounts.create_account("Alice", FAKE_HASH, FAKE_SALT)

    assert await accounts.resolve_username(account_id) == "Alice"
    assert await accounts.resolve_id("aLiCe") == account_id


async def test_duplicate_username_conflicts_regardless_of_case(accounts, count_rows):
    await accounts.create_account("alice", FAKE_HASH, FAKE_SALT)

    with pytest.raises(ConflictError) as excinfo:
        await accounts.create_account("ALICE", FAKE_HASH, FAKE_SALT)

    assert excinfo.value.details == {"username": "ALICE"}
    assert await count_rows(User) == 1


async def test_concurrent_signup_loses_on_unique_index(accounts, monkeypatch, count_rows):
    await accounts.create_account("alice", FAKE_HASH, FAKE_SALT)

    async def never_exists(_username):
        return False

    monkeypatch.setattr(accounts, "account_exists", never_exists)

    with pytest.raises(ConflictError):
        await accounts.create_account("Alice", FAKE_HASH, FAKE_SALT)
    assert await count_rows(User) == 1


@pytest.mark.parametrize("username", ["", "abcdefghijk", " alice", "alice "])
async def test_invalid_usernames_are_rejected(accounts, username, count_rows):
    with pytest.raises(ValidationError):
        await accounts.create_account(username, FAKE_HASH, FAKE_SALT)
    assert await count_rows(User) == 0


async def test_ten_character_username_is_accepted(accounts):
    await accounts.create_account("abcdefghij", FAKE_HASH, FAKE_SALT)

    assert await accounts.account_exists("ABCDEFGHIJ")


async def test_get_credential_returns_stored_pair(accounts):
    await accounts.create_account("alice", FAKE_HASH, FAKE_SALT)

    password_hash, salt = await accounts.get_credential("Alice")

    assert password_hash == FAKE_HASH
    assert salt == FAKE_SALT


async def test_get_credential_for_unknown_user(accounts):
    with pytest.raises(NotFoundError) as excinfo:
        await accounts.get_credential("ghost")

    assert "ghost" in excinfo.value.message


async def test_resolve_id_for_unknown_user(accounts):
    with pytest.raises(NotFoundError) as excinfo:
        await accounts.resolve_id("ghost")

    assert excinfo.value.message == "no such user ghost"


async def test_resolve_username_for_unknown_id(accounts):
    with pytest.raises(NotFoundError):
        await accounts.resolve_username(404)


async def test_usernames_compare_with_full_case_folding(accounts):
    await accounts.create_account("STRASSE", FAKE_HASH, FAKE_SALT)

    assert await accounts.account_exists("straße")
    with pytest.raises(ConflictError):
        await accounts.create_account("straße", FAKE_HASH, FAKE_SALT)
