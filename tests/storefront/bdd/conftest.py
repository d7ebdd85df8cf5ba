"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then
from storefront.catalogue.management import AddProduct
from storefront.errors import PermissionDeniedError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Product ids by name."""
    return {}


@pytest.fixture()
def error():
    """Container for the exception raised by the last When step."""
    return {"exc": None}


@pytest.fixture()
def attempt(error):
    """Run a When action, recording the domain error it raises instead of failing."""

    def _attempt(action):
        try:
            return action()
        except (ValidationError, ObjectNotFoundError, PermissionDeniedError) as exc:
            error["exc"] = exc
            return None

    return _attempt


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product named "{name}"'))
def _(products, name):
    products[name] = current_domain.process(
        AddProduct(product_name=name, price=9.99, created_by="seller-1"),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def _(error):
    assert isinstance(error["exc"], ValidationError)


@then("the action fails with a permission error")
def _(error):
    assert isinstance(error["exc"], PermissionDeniedError)


@then("the action fails with a not found error")
def _(error):
    assert isinstance(error["exc"], ObjectNotFoundError)
