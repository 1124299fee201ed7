"""
State Transition Testing

User lifecycle:
    Non-existent -> Created -> Retrieved -> Modified -> Deleted (Non-existent)
Authentication:
    Created -> Authenticated -> Logged out
Status:
    Inactive (0) -> Active (1) -> Inactive (0); login only works while active
Pet / order:
    available --order--> pending --cancel--> available; sold cannot be ordered
"""
import pytest

import data_provider
from api_helpers import RequestFailed
from logging_helper import log_data, log_step
from petstore_models import Order, PetStatus, User

pytestmark = pytest.mark.techniques


def test_complete_user_lifecycle(user_client):
    username = f"lifecycle_{data_provider.unique_suffix()}"

    log_step("STATE 1: Non-existent -> Created")
    user_client.create_user(User(
        username=username,
        first_name="Initial",
        last_name="User",
        email="initial@example.com",
        password="password123",
        user_status=0,
    ))

    log_step("STATE 2: Created -> Retrieved")
    retrieved = user_client.get_user_by_username(username)
    assert retrieved.user_status == 0

    log_step("STATE 3: Retrieved -> Modified (activated)")
    retrieved.first_name = "Updated"
    retrieved.last_name = "ActiveUser"
    retrieved.user_status = 1
    user_client.update_user(retrieved)

    verified = user_client.get_user_by_username(username)
    assert (verified.first_name, verified.user_status) == ("Updated", 1)

    log_step("STATE 4: Modified -> Deleted")
    user_client.delete_user(username)

    with pytest.raises(RequestFailed) as excinfo:
        user_client.get_user_by_username(username)
    assert excinfo.value.status_code == 404
    log_data("State Transition", "Deleted user is back to non-existent")


def test_authentication_transitions(user_client, created_usernames):
    user = data_provider.create_test_user()
    user_client.create_user(user)
    created_usernames.append(user.username)

    session = user_client.login_user(user.username, user.password)
    assert session.startswith("logged in user session:")

    user_client.logout_user()

    # logging in again after logout is a valid transition
    assert user_client.login_user(user.username, user.password) != session


def test_status_transitions_gate_login(user_client, created_usernames):
    user = data_provider.create_test_user()
    user.user_status = 0
    user_client.create_user(user)
    created_usernames.append(user.username)

    with pytest.raises(RequestFailed) as excinfo:
        user_client.login_user(user.username, user.password)
    assert excinfo.value.status_code == 403

    user.user_status = 1
    user_client.update_user(user)
    assert user_client.login_user(user.username, user.password).startswith("logged in user session:")

    user.user_status = 0
    user_client.update_user(user)
    with pytest.raises(RequestFailed) as excinfo:
        user_client.login_user(user.username, user.password)
    assert excinfo.value.status_code == 403


def test_profile_grows_from_basic_to_complete(user_client, created_usernames):
    username = f"profile_{data_provider.unique_suffix()}"
    basic = User(username=username, password="password123")
    created = user_client.create_user(basic)
    created_usernames.append(username)
    assert created.email is None

    complete = data_provider.create_full_test_user()
    complete.username = username
    user_client.update_user(complete)

    fetched = user_client.get_user_by_username(username)
    assert fetched.email == "john.doe@example.com"
    assert fetched.phone == "+1-555-123-4567"


def test_invalid_transitions_are_rejected(user_client):
    user = data_provider.create_test_user()

    # Non-existent: update, delete and login are not valid transitions
    for attempt in (lambda: user_client.update_user(user),
                    lambda: user_client.delete_user(user.username)):
        with pytest.raises(RequestFailed) as excinfo:
            attempt()
        assert excinfo.value.status_code == 404
    with pytest.raises(RequestFailed):
        user_client.login_user(user.username, user.password)

    # Deleted: a second delete fails
    user_client.create_user(user)
    user_client.delete_user(user.username)
    with pytest.raises(RequestFailed) as excinfo:
        user_client.delete_user(user.username)
    assert excinfo.value.status_code == 404


def test_pet_order_transitions(pet_client, store_client, created_pet_ids):
    pet = pet_client.create_pet(data_provider.create_test_pet())
    created_pet_ids.append(pet.id)

    order = store_client.place_order(Order(pet_id=pet.id, quantity=1))
    assert pet_client.get_pet_by_id(pet.id).status is PetStatus.PENDING

    # pending -> ordered again is not allowed
    with pytest.raises(RequestFailed) as excinfo:
        store_client.place_order(Order(pet_id=pet.id, quantity=1))
    assert excinfo.value.status_code == 400

    store_client.delete_order(order.id)
    assert pet_client.get_pet_by_id(pet.id).status is PetStatus.AVAILABLE

    pet.status = PetStatus.SOLD
    pet_client.update_pet(pet)
    with pytest.raises(RequestFailed):
        store_client.place_order(Order(pet_id=pet.id, quantity=1))
