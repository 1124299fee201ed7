import uuid

from petstore_models import Category, Pet, PetStatus, Tag, User


_CATEGORIES = [(1, "Dogs"), (2, "Cats"), (3, "Birds")]


def unique_suffix() -> str:
    # short numeric suffix; keeps names readable in server logs
    return str(uuid.uuid4().int % 1_000_000_000)


def _dogs() -> Category:
    return Category(id=1, name="Dogs")


def create_test_pet() -> Pet:
    return Pet(
        name=f"TestPet_{unique_suffix()}",
        category=_dogs(),
        photo_urls=["https://example.com/testpet.jpg"],
        status=PetStatus.AVAILABLE,
    )


def create_full_test_pet() -> Pet:
    """Pet with every optional field populated: two photos and two tags."""
    return Pet(
        name=f"Fluffy_{unique_suffix()}",
        category=_dogs(),
        photo_urls=[
            "https://example.com/fluffy1.jpg",
            "https://example.com/fluffy2.jpg",
        ],
        tags=[Tag(id=1, name="friendly"), Tag(id=2, name="playful")],
        status=PetStatus.AVAILABLE,
    )


def create_test_pet_with_status(status: PetStatus) -> Pet:
    return Pet(
        name=f"TestPet_{status.value}_{unique_suffix()}",
        category=_dogs(),
        photo_urls=["https://example.com/testpet.jpg"],
        status=status,
    )


def create_test_user() -> User:
    return User(
        username=f"testuser_{unique_suffix()}",
        first_name="Test",
        last_name="User",
        email="test@example.com",
        password="password123",
        phone="+1234567890",
        user_status=1,
    )


def create_full_test_user() -> User:
    return User(
        id=1,
        username=f"fulluser_{unique_suffix()}",
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        password="securePassword123",
        phone="+1-555-123-4567",
        user_status=1,
    )


def create_test_pets(count: int) -> list[Pet]:
    """Batch of available pets cycling through the Dogs / Cats / Birds categories."""
    pets = []
    for i in range(count):
        category_id, category_name = _CATEGORIES[i % len(_CATEGORIES)]
        pets.append(Pet(
            name=f"BatchPet_{i}_{unique_suffix()}",
            category=Category(id=category_id, name=category_name),
            photo_urls=[f"https://example.com/batch{i}.jpg"],
            status=PetStatus.AVAILABLE,
        ))
    return pets


def create_test_users(count: int) -> list[User]:
    return [
        User(
            username=f"batchuser_{i}_{unique_suffix()}",
            first_name=f"User{i}",
            last_name="Batch",
            email=f"user{i}@example.com",
            password=f"password{i}",
            phone=f"+123456789{i}",
            user_status=1,
        )
        for i in range(count)
    ]
