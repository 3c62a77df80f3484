"""Password hashing helpers."""

import pytest

from climatask.security import hash_password, verify_password


def test_hash_is_salted():
    first = hash_password("hunter2", rounds=4)
    second = hash_password("hunter2", rounds=4)
    assert first != second
    assert verify_password("hunter2", first)
    assert verify_password("hunter2", second)


def test_hash_records_cost_factor():
    assert hash_password("hunter2", rounds=5).startswith("$2b$05$")


def test_wrong_password_does_not_verify():
    assert verify_password("hunter3", hash_password("hunter2", rounds=4)) is False


def test_empty_password_cannot_be_hashed():
    with pytest.raises(ValueError):
        hash_password("", rounds=4)


@pytest.mark.parametrize("stored", ["", "not-a-bcrypt-hash"])
def test_unusable_stored_value_never_verifies(stored):
    assert verify_password("anything", stored) is False
