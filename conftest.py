"""
Shared pytest fixtures.
"""

import pytest

from shared.test_helpers import SigningKeyPair


@pytest.fixture(scope="session")
def signing_key():
    """RSA signing key published by the mock provider (generated once, it is slow)."""
    return SigningKeyPair.generate(kid="epic-key-1")


@pytest.fixture(scope="session")
def other_signing_key():
    """A second key the mock provider may or may not publish."""
    return SigningKeyPair.generate(kid="epic-key-2")
