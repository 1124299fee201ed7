import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent / "data"


def load_json(path):
    """
    Purpose:  Low-level helper that reads and parses a single JSON file from disk.

    No error handling inside: FileNotFoundError / JSONDecodeError reach the
    caller so a broken seed file fails the server start loudly.
    """
    with open(path, "r", encoding="utf-8") as file:
        return json.load(file)


def load_all_data(data_dir=DATA_DIR):
    """
    Purpose:  Loads the seed JSON files in parallel and returns them as a tuple
              in a fixed order (pets, users, orders).

    - ThreadPoolExecutor + as_completed: files load concurrently, results are
      collected into a dict and unpacked in a deterministic order
    - No error suppression: a missing or invalid file raises
    """
    data_dir = Path(data_dir)
    paths = {
        "pets": data_dir / "pet.json",
        "users": data_dir / "user.json",
        "orders": data_dir / "order.json",
    }
    results = {}
    with ThreadPoolExecutor(max_workers=len(paths)) as executor:
        future_map = {executor.submit(load_json, p): key for key, p in paths.items()}
        for fut in as_completed(future_map):
            key = future_map[fut]
            results[key] = fut.result()  # raises if file missing / invalid JSON
    return (
        results["pets"],
        results["users"],
        results["orders"],
    )
