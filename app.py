import json
import logging
import re
import threading
import time
import uuid
from datetime import datetime, timedelta, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from flask import Flask, Response, g, jsonify, request
from flask_restx import Api, Namespace, Resource, abort

from load_data import load_all_data
from models import Models


# Enums
PET_STATUS = ["available", "pending", "sold"]
ORDER_STATUS = ["placed", "approved", "delivered"]

API_PREFIX = "/api/v3"
REQUEST_ID_HEADER = "X-Request-ID"

USERNAME_MAX_LENGTH = 50
USER_STATUSES = (0, 1, 2)
LOGIN_BLOCKED_STATUSES = {0: "inactive", 2: "locked"}
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class PetStoreState:
    """
    In-memory storage for one app instance.

    Every handler mutates under `lock` so concurrent callers (threaded dev
    server, or several client threads through one WSGI transport) never see a
    half-applied write or hand out the same id twice.
    """

    def __init__(self, pets=None, users=None, orders=None):
        self.lock = threading.RLock()
        self.pets: dict[int, dict] = {p["id"]: p for p in pets or []}
        self.users: dict[str, dict] = {u["username"]: u for u in users or []}
        self.orders: dict[int, dict] = {o["id"]: o for o in orders or []}
        self.sessions: dict[str, str] = {}

    @classmethod
    def seeded(cls, data_dir=None) -> "PetStoreState":
        pets, users, orders = load_all_data(data_dir) if data_dir else load_all_data()
        return cls(pets, users, orders)

    def next_pet_id(self) -> int:
        return max(self.pets.keys(), default=0) + 1

    def next_order_id(self) -> int:
        return max(self.orders.keys(), default=0) + 1


# ----------------------------
# Payload validation
# ----------------------------
def _is_int(value) -> bool:
    # bool is an int subclass; reject it explicitly
    return type(value) is int


def _require_payload(kind=dict):
    payload = request.get_json(silent=True)
    if not isinstance(payload, kind):
        abort(400, "Invalid input")
    return payload


def _clean_named(value, label):
    if value is None:
        return None
    if not isinstance(value, dict):
        abort(400, f"{label} must be an object")
    if value.get("id") is not None and not _is_int(value.get("id")):
        abort(400, f"{label} 'id' must be an integer")
    if value.get("name") is not None and not isinstance(value.get("name"), str):
        abort(400, f"{label} 'name' must be a string")
    return {k: value.get(k) for k in ("id", "name") if value.get(k) is not None}


def validate_pet(payload: dict) -> dict:
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        abort(400, "Pet 'name' is required")

    photo_urls = payload.get("photoUrls")
    if not isinstance(photo_urls, list) or not all(isinstance(u, str) for u in photo_urls):
        abort(400, "Pet 'photoUrls' must be a list of strings")

    status = payload.get("status")
    if status is not None and status not in PET_STATUS:
        abort(400, f"Invalid status '{status}'. Valid statuses are {', '.join(PET_STATUS)}")

    tags = payload.get("tags") or []
    if not isinstance(tags, list):
        abort(400, "Pet 'tags' must be a list")

    return {
        "name": name,
        "category": _clean_named(payload.get("category"), "Category"),
        "photoUrls": list(photo_urls),
        "tags": [_clean_named(t, "Tag") for t in tags],
        "status": status,
    }


def validate_user(payload: dict) -> dict:
    username = payload.get("username")
    if not isinstance(username, str) or not username.strip():
        abort(400, "User 'username' is required")
    if len(username) > USERNAME_MAX_LENGTH:
        abort(400, f"User 'username' must be at most {USERNAME_MAX_LENGTH} characters")

    password = payload.get("password")
    if not isinstance(password, str) or not password:
        abort(400, "User 'password' is required")

    email = payload.get("email")
    if email is not None and (not isinstance(email, str) or not EMAIL_RE.match(email)):
        abort(400, f"Invalid email '{email}'")

    user_status = payload.get("userStatus")
    if user_status is not None and (not _is_int(user_status) or user_status not in USER_STATUSES):
        abort(400, f"User 'userStatus' must be one of {list(USER_STATUSES)}")

    user_id = payload.get("id")
    if user_id is not None and not _is_int(user_id):
        abort(400, "User 'id' must be an integer")

    for key in ("firstName", "lastName", "phone"):
        if payload.get(key) is not None and not isinstance(payload.get(key), str):
            abort(400, f"User '{key}' must be a string")

    return {
        "id": user_id,
        "username": username,
        "firstName": payload.get("firstName"),
        "lastName": payload.get("lastName"),
        "email": email,
        "password": password,
        "phone": payload.get("phone"),
        "userStatus": user_status,
    }


# ----------------------------
# Logging (JSON lines, one event per request)
# ----------------------------
def setup_request_logging(log_path: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger("petstore.server")
    logger.setLevel(logging.INFO)
    logger.propagate = False  # don't duplicate logs through root logger

    # Clear any existing handlers to guarantee current config applies
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    if log_path:
        path = Path(log_path).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(str(path), maxBytes=2_000_000, backupCount=2, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))  # JSON lines only
    logger.addHandler(handler)
    return logger


def create_app(seed: bool = True, log_path: Optional[str] = None, data_dir=None) -> Flask:
    """
    Build an in-memory Petstore v3 API (pet, user and store namespaces under /api/v3).

    - seed: preload data/*.json
    - log_path: write JSON request logs to a rotating file instead of stderr
    """
    app = Flask(__name__)
    api = Api(app, version='1.0', title='Petstore API',
              description='In-memory Swagger Petstore v3', prefix=API_PREFIX, doc=f"{API_PREFIX}/docs")

    models = Models(api, PET_STATUS, ORDER_STATUS)
    state = PetStoreState.seeded(data_dir) if seed else PetStoreState()
    app.extensions["petstore"] = state
    logger = setup_request_logging(log_path)

    pet_ns = Namespace("pet", description="Everything about your pets")
    user_ns = Namespace("user", description="Operations about user")
    store_ns = Namespace("store", description="Access to Petstore orders")
    for ns in (pet_ns, user_ns, store_ns):
        api.add_namespace(ns)

    # ----------------------------
    # Request id correlation
    # ----------------------------
    @app.before_request
    def _start_request():
        g.started = time.perf_counter()
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

    @app.after_request
    def _finish_request(resp):
        request_id = getattr(g, "request_id", None) or str(uuid.uuid4())
        duration_ms = int((time.perf_counter() - getattr(g, "started", time.perf_counter())) * 1000)
        resp.headers[REQUEST_ID_HEADER] = request_id
        logger.info(json.dumps({
            "event": "http_request",
            "request_id": request_id,
            "method": request.method,
            "path": request.path,
            "status": resp.status_code,
            "duration_ms": duration_ms,
        }))
        return resp

    @app.route('/health')
    def health_check():
        """Health check endpoint for CI/CD monitoring"""
        return jsonify({
            "status": "healthy",
            "service": "pet-store-api",
            "version": "1.0.0"
        }), 200

    # ----------------------------
    # Pet namespace
    # ----------------------------
    def _get_pet(pet_id):
        pet = state.pets.get(pet_id)
        if pet is None:
            abort(404, f"Pet with ID {pet_id} not found")
        return pet

    @pet_ns.route('')
    class PetCollection(Resource):
        @pet_ns.doc('add_pet')
        @pet_ns.expect(models.pet_model)
        @pet_ns.marshal_with(models.pet_model, skip_none=True)
        def post(self):
            """Add a new pet to the store"""
            payload = _require_payload()
            pet = validate_pet(payload)
            incoming_id = payload.get("id")
            with state.lock:
                if incoming_id is None:
                    pet["id"] = state.next_pet_id()
                else:
                    if not _is_int(incoming_id):
                        abort(400, "Pet 'id' must be an integer")
                    if incoming_id in state.pets:
                        abort(409, f"Pet with ID {incoming_id} already exists")
                    pet["id"] = incoming_id
                state.pets[pet["id"]] = pet
            return pet

        @pet_ns.doc('update_pet')
        @pet_ns.expect(models.pet_model)
        @pet_ns.marshal_with(models.pet_model, skip_none=True)
        def put(self):
            """Update an existing pet by id"""
            payload = _require_payload()
            pet_id = payload.get("id")
            if not _is_int(pet_id):
                abort(400, "Pet 'id' is required and must be an integer")
            pet = validate_pet(payload)
            with state.lock:
                _get_pet(pet_id)
                pet["id"] = pet_id
                state.pets[pet_id] = pet
            return pet

    @pet_ns.route('/findByStatus')
    @pet_ns.param('status', 'Status value to filter by (defaults to available)')
    class PetFindByStatus(Resource):
        @pet_ns.doc('find_pets_by_status')
        @pet_ns.marshal_list_with(models.pet_model, skip_none=True)
        def get(self):
            """Find pets by status"""
            status = request.args.get('status', 'available')
            if status not in PET_STATUS:
                abort(400, f"Invalid pet status {status}")
            with state.lock:
                return [p for p in state.pets.values() if p.get("status") == status]

    @pet_ns.route('/findByTags')
    @pet_ns.param('tags', 'Comma separated tag names')
    class PetFindByTags(Resource):
        @pet_ns.doc('find_pets_by_tags')
        @pet_ns.marshal_list_with(models.pet_model, skip_none=True)
        def get(self):
            """Find pets carrying any of the given tags"""
            wanted = {
                t.strip()
                for raw in request.args.getlist('tags')
                for t in raw.split(',')
                if t.strip()
            }
            if not wanted:
                abort(400, "No tags provided")
            with state.lock:
                return [
                    p for p in state.pets.values()
                    if any(t.get("name") in wanted for t in p.get("tags") or [])
                ]

    @pet_ns.route('/<int:pet_id>')
    @pet_ns.response(404, 'Pet not found')
    @pet_ns.param('pet_id', 'The pet identifier')
    class PetItem(Resource):
        @pet_ns.doc('get_pet_by_id')
        @pet_ns.marshal_with(models.pet_model, skip_none=True)
        def get(self, pet_id):
            """Find pet by ID"""
            with state.lock:
                return _get_pet(pet_id)

        @pet_ns.doc('delete_pet')
        @pet_ns.marshal_with(models.message_model)
        def delete(self, pet_id):
            """Deletes a pet"""
            with state.lock:
                _get_pet(pet_id)
                del state.pets[pet_id]
            return {"code": 200, "message": f"Pet {pet_id} deleted"}, 200

    # ----------------------------
    # User namespace
    # ----------------------------
    def _get_user(username):
        user = state.users.get(username)
        if user is None:
            abort(404, f"User {username} not found")
        return user

    def _insert_users(payloads):
        users = []
        for p in payloads:
            if not isinstance(p, dict):
                abort(400, "Invalid input")
            users.append(validate_user(p))
        names = [u["username"] for u in users]
        if len(set(names)) != len(names):
            abort(400, "Duplicate usernames in batch")
        with state.lock:
            taken = [n for n in names if n in state.users]
            if taken:
                abort(409, f"User {taken[0]} already exists")
            for user in users:
                state.users[user["username"]] = user
        return users

    @user_ns.route('')
    class UserCollection(Resource):
        @user_ns.doc('create_user')
        @user_ns.expect(models.user_model)
        @user_ns.marshal_with(models.user_model, skip_none=True)
        def post(self):
            """Create user"""
            return _insert_users([_require_payload()])[0]

    @user_ns.route('/createWithList')
    class UserCreateWithList(Resource):
        @user_ns.doc('create_users_with_list')
        @user_ns.marshal_list_with(models.user_model, skip_none=True)
        def post(self):
            """Creates list of users with given input list (all or nothing)"""
            return _insert_users(_require_payload(list))

    @user_ns.route('/createWithArray')
    class UserCreateWithArray(Resource):
        @user_ns.doc('create_users_with_array')
        @user_ns.marshal_list_with(models.user_model, skip_none=True)
        def post(self):
            """Creates list of users with given input array (all or nothing)"""
            return _insert_users(_require_payload(list))

    @user_ns.route('/login')
    @user_ns.param('username', 'The user name for login')
    @user_ns.param('password', 'The password for login in clear text')
    class UserLogin(Resource):
        @user_ns.doc('login_user')
        def get(self):
            """Logs user into the system"""
            username = request.args.get('username')
            password = request.args.get('password')
            if not username or not password:
                abort(400, "Invalid username/password supplied")
            with state.lock:
                user = state.users.get(username)
                if user is None or user.get("password") != password:
                    abort(400, "Invalid username/password supplied")
                blocked = LOGIN_BLOCKED_STATUSES.get(user.get("userStatus"))
                if blocked:
                    abort(403, f"User account is {blocked}")
                token = uuid.uuid4().hex
                state.sessions[token] = username
            expires = datetime.now(timezone.utc) + timedelta(hours=1)
            resp = Response(f"logged in user session:{token}", status=200, mimetype="text/plain")
            resp.headers["X-Rate-Limit"] = "5000"
            resp.headers["X-Expires-After"] = expires.isoformat()
            return resp

    @user_ns.route('/logout')
    class UserLogout(Resource):
        @user_ns.doc('logout_user')
        @user_ns.marshal_with(models.message_model)
        def get(self):
            """Logs out current logged in user session"""
            with state.lock:
                state.sessions.clear()
            return {"code": 200, "message": "User logged out"}, 200

    @user_ns.route('/<string:username>')
    @user_ns.response(404, 'User not found')
    @user_ns.param('username', 'The name that needs to be fetched')
    class UserItem(Resource):
        @user_ns.doc('get_user_by_name')
        @user_ns.marshal_with(models.user_model, skip_none=True)
        def get(self, username):
            """Get user by user name"""
            with state.lock:
                return _get_user(username)

        @user_ns.doc('update_user')
        @user_ns.expect(models.user_model)
        @user_ns.marshal_with(models.user_model, skip_none=True)
        def put(self, username):
            """Update user; the body username must match the path"""
            payload = _require_payload()
            if payload.get("username") is None:
                payload["username"] = username
            if payload["username"] != username:
                abort(400, "Username in body does not match path")
            user = validate_user(payload)
            with state.lock:
                _get_user(username)
                state.users[username] = user
            return user

        @user_ns.doc('delete_user')
        @user_ns.marshal_with(models.message_model)
        def delete(self, username):
            """Delete user"""
            with state.lock:
                _get_user(username)
                del state.users[username]
            return {"code": 200, "message": f"User {username} deleted"}, 200

    # ----------------------------
    # Store namespace
    # ----------------------------
    def _get_order(order_id):
        order = state.orders.get(order_id)
        if order is None:
            abort(404, "Order not found")
        return order

    @store_ns.route('/inventory')
    class StoreInventory(Resource):
        @store_ns.doc('get_inventory')
        def get(self):
            """Returns pet counts by status"""
            with state.lock:
                counts = {status: 0 for status in PET_STATUS}
                for pet in state.pets.values():
                    if pet.get("status") in counts:
                        counts[pet["status"]] += 1
            return counts, 200

    @store_ns.route('/order')
    class StoreOrder(Resource):
        @store_ns.doc('place_order')
        @store_ns.expect(models.order_model)
        @store_ns.marshal_with(models.order_model, skip_none=True)
        def post(self):
            """Place an order for an available pet; the pet becomes pending"""
            payload = _require_payload()
            pet_id = payload.get("petId")
            quantity = payload.get("quantity")
            status = payload.get("status") or "placed"

            if not _is_int(pet_id):
                abort(400, "petId is required")
            if not _is_int(quantity) or quantity <= 0:
                abort(400, "quantity must be a positive integer")
            if status not in ORDER_STATUS:
                abort(400, f"Invalid status '{status}'. Valid statuses are {', '.join(ORDER_STATUS)}")

            with state.lock:
                pet = state.pets.get(pet_id)
                if pet is None:
                    abort(404, f"No pet found with ID {pet_id}")
                if pet.get("status") != "available":
                    abort(400, f"Pet with ID {pet_id} is not available for order")

                order = {
                    "id": state.next_order_id(),
                    "petId": pet_id,
                    "quantity": quantity,
                    "shipDate": payload.get("shipDate"),
                    "status": status,
                    "complete": bool(payload.get("complete", False)),
                }
                state.orders[order["id"]] = order
                pet["status"] = "pending"
            return order

    @store_ns.route('/order/<int:order_id>')
    @store_ns.response(404, 'Order not found')
    @store_ns.param('order_id', 'The order identifier')
    class StoreOrderItem(Resource):
        @store_ns.doc('get_order_by_id')
        @store_ns.marshal_with(models.order_model, skip_none=True)
        def get(self, order_id):
            """Find purchase order by ID"""
            with state.lock:
                return _get_order(order_id)

        @store_ns.doc('delete_order')
        @store_ns.marshal_with(models.message_model)
        def delete(self, order_id):
            """Cancel an order; a pending pet goes back to available"""
            with state.lock:
                order = _get_order(order_id)
                del state.orders[order_id]
                pet = state.pets.get(order["petId"])
                if pet is not None and pet.get("status") == "pending":
                    pet["status"] = "available"
            return {"code": 200, "message": f"Order {order_id} deleted"}, 200

    return app


if __name__ == '__main__':
    # `flask --app app run` finds create_app on its own
    create_app().run(port=8080, threaded=True)
