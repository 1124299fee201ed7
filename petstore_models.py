from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PetStatus(str, Enum):
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"


class OrderStatus(str, Enum):
    PLACED = "placed"
    APPROVED = "approved"
    DELIVERED = "delivered"


def _drop_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class Category:
    id: Optional[int] = None
    name: Optional[str] = None

    def to_dict(self) -> dict:
        return _drop_none({"id": self.id, "name": self.name})

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(id=data.get("id"), name=data.get("name"))


@dataclass
class Tag:
    id: Optional[int] = None
    name: Optional[str] = None

    def to_dict(self) -> dict:
        return _drop_none({"id": self.id, "name": self.name})

    @classmethod
    def from_dict(cls, data: dict) -> "Tag":
        return cls(id=data.get("id"), name=data.get("name"))


@dataclass
class Pet:
    """A pet as exchanged with /pet endpoints. JSON keys are camelCase."""
    name: Optional[str] = None
    photo_urls: list[str] = field(default_factory=list)
    id: Optional[int] = None
    category: Optional[Category] = None
    tags: list[Tag] = field(default_factory=list)
    status: Optional[PetStatus] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "category": self.category.to_dict() if self.category else None,
            "photoUrls": list(self.photo_urls),
            "tags": [t.to_dict() for t in self.tags],
            "status": self.status.value if isinstance(self.status, PetStatus) else self.status,
        })

    @classmethod
    def from_dict(cls, data: dict) -> "Pet":
        status = data.get("status")
        category = data.get("category")
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            category=Category.from_dict(category) if category else None,
            photo_urls=list(data.get("photoUrls") or []),
            tags=[Tag.from_dict(t) for t in data.get("tags") or []],
            # unknown statuses are kept as raw strings instead of failing the decode
            status=PetStatus(status) if status in PetStatus._value2member_map_ else status,
        )


@dataclass
class User:
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    user_status: Optional[int] = None
    id: Optional[int] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "id": self.id,
            "username": self.username,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "password": self.password,
            "phone": self.phone,
            "userStatus": self.user_status,
        })

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=data.get("id"),
            username=data.get("username"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            email=data.get("email"),
            password=data.get("password"),
            phone=data.get("phone"),
            user_status=data.get("userStatus"),
        )


@dataclass
class Order:
    pet_id: Optional[int] = None
    quantity: Optional[int] = None
    id: Optional[int] = None
    ship_date: Optional[str] = None
    status: Optional[OrderStatus] = None
    complete: Optional[bool] = None

    def to_dict(self) -> dict:
        return _drop_none({
            "id": self.id,
            "petId": self.pet_id,
            "quantity": self.quantity,
            "shipDate": self.ship_date,
            "status": self.status.value if isinstance(self.status, OrderStatus) else self.status,
            "complete": self.complete,
        })

    @classmethod
    def from_dict(cls, data: dict) -> "Order":
        status = data.get("status")
        return cls(
            id=data.get("id"),
            pet_id=data.get("petId"),
            quantity=data.get("quantity"),
            ship_date=data.get("shipDate"),
            status=OrderStatus(status) if status in OrderStatus._value2member_map_ else status,
            complete=data.get("complete"),
        )
