# post.py

import datetime

import mongoengine
from models.user import User

# Denormalized counters, rewritten from the reaction records after every toggle
class Stats(mongoengine.EmbeddedDocument):
    likes = mongoengine.IntField(min_value=0, default=0)
    dislikes = mongoengine.IntField(min_value=0, default=0)
    replies = mongoengine.IntField(min_value=0, default=0)
    reposts = mongoengine.IntField(min_value=0, default=0)


class Post(mongoengine.Document):
    author = mongoengine.ReferenceField(User, required=True, reverse_delete_rule=mongoengine.CASCADE)
    text = mongoengine.StringField(required=True, max_length=280)
    date = mongoengine.DateTimeField(default=lambda: datetime.datetime.now(datetime.timezone.utc))
    parent = mongoengine.ReferenceField('self', reverse_delete_rule=mongoengine.CASCADE)
    stats = mongoengine.EmbeddedDocumentField(Stats, default=Stats)
