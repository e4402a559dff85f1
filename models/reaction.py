# reaction.py

from enum import Enum

import mongoengine
from models.post import Post
from models.user import User


class ReactionStatus(str, Enum):
    NEUTRAL = 'NEUTRAL' # never stored, absence of a record
    LIKED = 'LIKED'
    DISLIKED = 'DISLIKED'


class ReactionAction(str, Enum):
    LIKE = 'LIKE'
    DISLIKE = 'DISLIKE'


class Reaction(mongoengine.Document):
    user = mongoengine.ReferenceField(User, required=True, reverse_delete_rule=mongoengine.CASCADE)
    post = mongoengine.ReferenceField(Post, required=True, reverse_delete_rule=mongoengine.CASCADE)
    status = mongoengine.StringField(
        required=True,
        choices=(ReactionStatus.LIKED.value, ReactionStatus.DISLIKED.value)
    )

    meta = {
        'indexes': [
            { 'fields': ['user', 'post'], 'unique': True },
            { 'fields': ['post', 'status'] },
            { 'fields': ['user', 'status'] }
        ]
    }
