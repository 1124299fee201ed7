import os

import httpx
import pytest

from api_clients import PetRestClient, StoreRestClient, UserRestClient
from api_helpers import RequestFailed, RestClient
from app import create_app
from config import ClientConfig
from logging_helper import log_data, log_error, log_step

# Host is never resolved: requests go straight into the Flask app via WSGI.
IN_PROCESS_BASE_URL = "http://petstore.test/api/v3"

# Set PETSTORE_BASE_URL to run the API suites against a real server instead.
LIVE_BASE_URL = os.getenv("PETSTORE_BASE_URL")


@pytest.fixture
def petstore_app():
    return create_app()


@pytest.fixture
def rest_client(petstore_app):
    if LIVE_BASE_URL:
        config = ClientConfig.from_env()
        transport = None
    else:
        config = ClientConfig(base_url=IN_PROCESS_BASE_URL)
        transport = httpx.WSGITransport(app=petstore_app)

    log_step(f"Setting up REST client for {config.base_url}")
    with RestClient(config, transport=transport) as client:
        yield client


@pytest.fixture
def pet_client(rest_client):
    return PetRestClient(rest_client)


@pytest.fixture
def user_client(rest_client):
    return UserRestClient(rest_client)


@pytest.fixture
def store_client(rest_client):
    return StoreRestClient(rest_client)


# ----------------------------
# Best-effort cleanup: failures are logged, never fail the test
# ----------------------------
@pytest.fixture
def created_pet_ids(pet_client):
    pet_ids = []
    yield pet_ids
    for pet_id in pet_ids:
        try:
            pet_client.delete_pet(pet_id)
            log_data("Cleanup", f"Pet with ID {pet_id} deleted")
        except RequestFailed as e:
            log_error("Cleanup failed", e)


@pytest.fixture
def created_usernames(user_client):
    usernames = []
    yield usernames
    for username in usernames:
        try:
            user_client.delete_user(username)
            log_data("Cleanup", f"User {username} deleted")
        except RequestFailed as e:
            log_error("Cleanup failed", e)


@pytest.fixture
def created_order_ids(store_client):
    order_ids = []
    yield order_ids
    for order_id in order_ids:
        try:
            store_client.delete_order(order_id)
            log_data("Cleanup", f"Order {order_id} deleted")
        except RequestFailed as e:
            log_error("Cleanup failed", e)
