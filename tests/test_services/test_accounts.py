# tests/test_services/test_accounts.py

import pytest
from core.services.accounts import AccountService

@pytest.fixture
def accounts(database):
    return AccountService(database)

def test_register_account(accounts):
    """Test that registration returns the new account ID."""
    result = accounts.register_account("asha", "s3cret", "Asha Rao", "asha@example.com")
    assert result.success is True
    assert result.message == "Registration successful"
    assert result.account_id is not None

def test_register_duplicate(accounts):
    """Test that a taken username is refused."""
    accounts.register_account("asha", "s3cret", "Asha Rao", "asha@example.com")
    result = accounts.register_account("asha", "other", "Asha R", "asha2@example.com")
    assert result.success is False
    assert result.error == "validation_failed"
    assert result.message == "Username or email already exists"

def test_register_missing_fields(accounts):
    result = accounts.register_account("asha", "", "Asha Rao", "asha@example.com")
    assert result.success is False
    assert result.error == "validation_failed"

def test_verify_credentials(accounts):
    """Test checking a password against the stored hash."""
    account_id = accounts.register_account("asha", "s3cret", "Asha Rao", "asha@example.com").account_id
    assert accounts.verify_credentials("asha", "s3cret").account_id == account_id
    assert accounts.verify_credentials("asha", "nope") is None
