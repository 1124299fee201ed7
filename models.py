from flask_restx import fields

class Models:
    def __init__(self, api, PET_STATUS, ORDER_STATUS):
        self.category_model = api.model('Category', {
            'id': fields.Integer(description='The category ID'),
            'name': fields.String(description='The category name'),
        })

        self.tag_model = api.model('Tag', {
            'id': fields.Integer(description='The tag ID'),
            'name': fields.String(description='The tag name'),
        })

        self.pet_model = api.model('Pet', {
            'id': fields.Integer(description='The pet ID'),
            'name': fields.String(required=True, description='The pet name'),
            'category': fields.Nested(self.category_model, allow_null=True, skip_none=True),
            'photoUrls': fields.List(fields.String, required=True, description='Photo URLs'),
            'tags': fields.List(fields.Nested(self.tag_model, skip_none=True)),
            'status': fields.String(description='Pet status in the store', enum=PET_STATUS),
        })

        self.user_model = api.model('User', {
            'id': fields.Integer(description='The user ID'),
            'username': fields.String(required=True, description='Unique login name'),
            'firstName': fields.String(description='First name'),
            'lastName': fields.String(description='Last name'),
            'email': fields.String(description='Contact email'),
            'password': fields.String(required=True, description='Password'),
            'phone': fields.String(description='Phone number'),
            'userStatus': fields.Integer(description='0 inactive, 1 active, 2 locked'),
        })

        self.order_model = api.model('Order', {
            'id': fields.Integer(readonly=True, description='The order ID'),
            'petId': fields.Integer(required=True, description='Ordered pet ID'),
            'quantity': fields.Integer(required=True, description='Quantity purchased'),
            'shipDate': fields.String(description='Ship date (ISO 8601)'),
            'status': fields.String(description='Order status', enum=ORDER_STATUS),
            'complete': fields.Boolean(description='Order completed'),
        })

        self.message_model = api.model('ApiResponse', {
            'code': fields.Integer(description='HTTP status code'),
            'message': fields.String(description='Human readable result'),
        })
