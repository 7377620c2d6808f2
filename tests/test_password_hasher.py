from code_modules.password_hasher import PasswordHasher


def test_hash_and_verify():
    hasher = PasswordHasher(rounds=4)

    hashed = hasher.hash("password1")

    assert hashed != "password1"
    assert hashed.startswith("$2")
    assert hasher.verify("password1", hashed)
    assert not hasher.verify("password2", hashed)


def test_hash_is_salted():
    hasher = PasswordHasher(rounds=4)

    assert hasher.hash("password1") != hasher.hash("password1")


def test_verify_rejects_malformed_hash():
    assert not PasswordHasher(rounds=4).verify("password1", "not-a-hash")


def test_burn_reuses_dummy_hash():
    hasher = PasswordHasher(rounds=4)

    hasher.burn("password1")
    first = hasher._dummy_hash
    hasher.burn("password2")

    assert first is not None
    assert hasher._dummy_hash == first
