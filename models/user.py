# user.py

import mongoengine

class User(mongoengine.Document):
    full_name = mongoengine.StringField(required=True, max_length=50)
    username = mongoengine.StringField(required=True, max_length=30, unique=True)
    bio = mongoengine.StringField()
