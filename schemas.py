category = {
    "type": "object",
    "properties": {
        "id": {
            "type": "integer"
        },
        "name": {
            "type": "string"
        }
    }
}

tag = {
    "type": "object",
    "properties": {
        "id": {
            "type": "integer"
        },
        "name": {
            "type": "string"
        }
    }
}

pet = {
    "type": "object",
    "required": ["id", "name", "photoUrls"],
    "properties": {
        "id": {
            "type": "integer"
        },
        "name": {
            "type": "string"
        },
        "category": category,
        "photoUrls": {
            "type": "array",
            "items": {"type": "string"}
        },
        "tags": {
            "type": "array",
            "items": tag
        },
        "status": {
            "type": "string",
            "enum": ["available", "pending", "sold"]
        }
    }
}

pet_list = {
    "type": "array",
    "items": pet
}


user = {
    "type": "object",
    "required": ["username"],
    "properties": {
        "id": {
            "type": "integer"
        },
        "username": {
            "type": "string",
            "minLength": 1,
            "maxLength": 50
        },
        "firstName": {
            "type": "string"
        },
        "lastName": {
            "type": "string"
        },
        "email": {
            "type": "string"
        },
        "password": {
            "type": "string"
        },
        "phone": {
            "type": "string"
        },
        "userStatus": {
            "type": "integer",
            "enum": [0, 1, 2]
        }
    }
}


order = {
    "type": "object",
    "required": ["id", "petId", "quantity", "status"],
    "properties": {
        "id": {
            "type": "integer"
        },
        "petId": {
            "type": "integer"
        },
        "quantity": {
            "type": "integer",
            "minimum": 1
        },
        "shipDate": {
            "type": "string"
        },
        "status": {
            "type": "string",
            "enum": ["placed", "approved", "delivered"]
        },
        "complete": {
            "type": "boolean"
        }
    }
}


inventory = {
    "type": "object",
    "additionalProperties": {
        "type": "integer",
        "minimum": 0
    }
}
