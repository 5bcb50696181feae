import pytest

from shopadmin.auth import ApiKeyChecker


def test_matching_key_verifies():
    checker = ApiKeyChecker("s3cret")
    assert checker.verify("s3cret")
    assert checker.verify("  s3cret  ")


@pytest.mark.parametrize("supplied", [None, "", "S3CRET", "s3cret-extra"])
def test_other_values_rejected(supplied):
    assert not ApiKeyChecker("s3cret").verify(supplied)


def test_empty_secret_never_verifies():
    checker = ApiKeyChecker("")
    assert not checker.configured
    assert not checker.verify("")
    assert not checker.verify("anything")
