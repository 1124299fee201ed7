from typing import Iterable, Union

from api_helpers import RestClient
from petstore_models import Order, Pet, PetStatus, User


class BaseRestClient:
    """Shared base for the resource clients: holds the RestClient they delegate to."""

    def __init__(self, rest_client: RestClient):
        self.rest_client = rest_client


class PetRestClient(BaseRestClient):
    """Typed CRUD and search calls for /pet."""

    PET_ENDPOINT = "pet"

    def create_pet(self, pet: Pet) -> Pet:
        return self.rest_client.post(pet, Pet, self.PET_ENDPOINT)

    def get_pet_by_id(self, pet_id: int) -> Pet:
        return self.rest_client.get(Pet, self.PET_ENDPOINT, pet_id)

    def update_pet(self, pet: Pet) -> Pet:
        return self.rest_client.put(pet, Pet, self.PET_ENDPOINT)

    def delete_pet(self, pet_id: int) -> None:
        self.rest_client.delete(None, self.PET_ENDPOINT, pet_id)

    def find_pets_by_status(self, status: Union[PetStatus, str]) -> list[Pet]:
        value = status.value if isinstance(status, PetStatus) else status
        return self.rest_client.get(list[Pet], self.PET_ENDPOINT, "findByStatus",
                                    query_params=[f"status={value}"])

    def find_pets_by_tags(self, tags: Iterable[str]) -> list[Pet]:
        tags_param = ",".join(tags)
        return self.rest_client.get(list[Pet], self.PET_ENDPOINT, "findByTags",
                                    query_params=[f"tags={tags_param}"])


class UserRestClient(BaseRestClient):
    """Typed calls for /user, including login/logout and the batch creates."""

    USER_ENDPOINT = "user"

    def create_user(self, user: User) -> User:
        return self.rest_client.post(user, User, self.USER_ENDPOINT)

    def get_user_by_username(self, username: str) -> User:
        return self.rest_client.get(User, self.USER_ENDPOINT, username)

    def update_user(self, user: User) -> User:
        return self.rest_client.put(user, User, self.USER_ENDPOINT, user.username)

    def delete_user(self, username: str) -> None:
        self.rest_client.delete(None, self.USER_ENDPOINT, username)

    def login_user(self, username: str, password: str) -> str:
        # a value containing "=" is dropped by the query parser, like any malformed param
        query_params = [f"username={username}", f"password={password}"]
        return self.rest_client.get(str, self.USER_ENDPOINT, "login", query_params=query_params)

    def logout_user(self) -> None:
        self.rest_client.get(None, self.USER_ENDPOINT, "logout")

    def create_users_with_array(self, users: list[User]) -> None:
        self.rest_client.post(users, None, self.USER_ENDPOINT, "createWithArray")

    def create_users_with_list(self, users: list[User]) -> None:
        self.rest_client.post(users, None, self.USER_ENDPOINT, "createWithList")


class StoreRestClient(BaseRestClient):
    """Typed calls for /store: inventory and orders."""

    STORE_ENDPOINT = "store"

    def get_inventory(self) -> dict[str, int]:
        return self.rest_client.get(dict[str, int], self.STORE_ENDPOINT, "inventory")

    def place_order(self, order: Order) -> Order:
        return self.rest_client.post(order, Order, self.STORE_ENDPOINT, "order")

    def get_order_by_id(self, order_id: int) -> Order:
        return self.rest_client.get(Order, self.STORE_ENDPOINT, "order", order_id)

    def delete_order(self, order_id: int) -> None:
        self.rest_client.delete(None, self.STORE_ENDPOINT, "order", order_id)
