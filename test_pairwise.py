"""
Pairwise Testing

Four factors with three levels each would need 3**4 = 81 runs for full
coverage. The L9 orthogonal array below covers every pair of levels of every
two factors in 9 runs; test_matrix_covers_every_pair proves it.
"""
from itertools import combinations, product

import pytest

import data_provider
from api_helpers import RequestFailed
from petstore_models import User

pytestmark = pytest.mark.techniques

USERNAME_STYLES = ["plain", "dotted", "underscored"]
EMAIL_DOMAINS = ["example.com", "mail.example.org", "test.io"]
USER_STATUSES = [0, 1, 2]
PHONES = [None, "+1234567890", "+1-555-123-4567"]

FACTORS = [USERNAME_STYLES, EMAIL_DOMAINS, USER_STATUSES, PHONES]

# L9(3^4) orthogonal array, level indexes per factor
L9 = [
    (0, 0, 0, 0),
    (0, 1, 1, 1),
    (0, 2, 2, 2),
    (1, 0, 1, 2),
    (1, 1, 2, 0),
    (1, 2, 0, 1),
    (2, 0, 2, 1),
    (2, 1, 0, 2),
    (2, 2, 1, 0),
]

PAIRWISE_CASES = [tuple(FACTORS[i][level] for i, level in enumerate(row)) for row in L9]


def _username(style):
    suffix = data_provider.unique_suffix()
    return {
        "plain": f"pairuser{suffix}",
        "dotted": f"pair.user.{suffix}",
        "underscored": f"pair_user_{suffix}",
    }[style]


def test_matrix_covers_every_pair():
    for (i, levels_i), (j, levels_j) in combinations(enumerate(FACTORS), 2):
        seen = {(case[i], case[j]) for case in PAIRWISE_CASES}
        assert seen == set(product(levels_i, levels_j)), f"factors {i} and {j} miss a pair"


@pytest.mark.parametrize("style, domain, status, phone", PAIRWISE_CASES)
def test_create_user_pairwise(user_client, created_usernames, style, domain, status, phone):
    user = User(
        username=_username(style),
        first_name="Pair",
        last_name="Wise",
        email=f"pair@{domain}",
        password="password123",
        phone=phone,
        user_status=status,
    )

    user_client.create_user(user)
    created_usernames.append(user.username)

    fetched = user_client.get_user_by_username(user.username)
    assert fetched.email == user.email
    assert fetched.user_status == status
    assert fetched.phone == phone


# field x value kind x starting status; only an empty email breaks validation
UPDATE_CASES = [
    ("first_name", "valid", 1),
    ("first_name", "empty", 0),
    ("first_name", "unicode", 2),
    ("last_name", "valid", 0),
    ("last_name", "empty", 2),
    ("last_name", "unicode", 1),
    ("email", "valid", 2),
    ("email", "empty", 1),
    ("email", "unicode", 0),
]

UPDATE_VALUES = {
    ("first_name", "valid"): "Updated",
    ("first_name", "empty"): "",
    ("first_name", "unicode"): "Zoë",
    ("last_name", "valid"): "Changed",
    ("last_name", "empty"): "",
    ("last_name", "unicode"): "Müller",
    ("email", "valid"): "updated@example.com",
    ("email", "empty"): "",
    ("email", "unicode"): "zoë@exämple.de",
}


@pytest.mark.parametrize("field, value_kind, status", UPDATE_CASES)
def test_update_user_pairwise(user_client, created_usernames, field, value_kind, status):
    user = data_provider.create_test_user()
    user.user_status = status
    user_client.create_user(user)
    created_usernames.append(user.username)

    value = UPDATE_VALUES[(field, value_kind)]
    setattr(user, field, value)

    if field == "email" and value_kind == "empty":
        with pytest.raises(RequestFailed) as excinfo:
            user_client.update_user(user)
        assert excinfo.value.status_code == 400
    else:
        updated = user_client.update_user(user)
        assert getattr(updated, field) == value
