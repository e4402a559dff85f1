# reactions.py

import logging
from collections import namedtuple
from contextlib import contextmanager

from bson.objectid import ObjectId
from mongoengine.errors import OperationError
from pymongo.errors import PyMongoError

from models.post import Post
from models.reaction import Reaction, ReactionAction, ReactionStatus
from services.errors import InvalidInput, NotFound, ReactionError, StoreUnavailable, ToggleStep

logger = logging.getLogger(__name__)

Counters = namedtuple('Counters', ['likes', 'dislikes'])
Toggled = namedtuple('Toggled', ['status', 'counters'])

# (current, action) -> next
TRANSITIONS = {
    (ReactionStatus.NEUTRAL, ReactionAction.LIKE): ReactionStatus.LIKED,
    (ReactionStatus.NEUTRAL, ReactionAction.DISLIKE): ReactionStatus.DISLIKED,
    (ReactionStatus.LIKED, ReactionAction.LIKE): ReactionStatus.NEUTRAL,
    (ReactionStatus.LIKED, ReactionAction.DISLIKE): ReactionStatus.DISLIKED,
    (ReactionStatus.DISLIKED, ReactionAction.DISLIKE): ReactionStatus.NEUTRAL,
    (ReactionStatus.DISLIKED, ReactionAction.LIKE): ReactionStatus.LIKED,
}


def next_status(current, action):
    return TRANSITIONS[(ReactionStatus(current), ReactionAction(action))]


# failing_step()
@contextmanager
def failing_step(step):
    """Tag collaborator failures with the step they happened in."""
    try:
        yield
    except ReactionError as err:
        if err.step is None:
            err.step = step
        raise
    except (PyMongoError, OperationError) as err:
        raise StoreUnavailable(f'{type(err).__name__}: {err}', step=step) from err


def to_object_id(value, name):
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidInput(f'Malformed {name}: {value!r}', step=ToggleStep.VALIDATE)
    return ObjectId(value)


def to_enum(enum_cls, value, name):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidInput(f'Unknown {name}: {value!r}', step=ToggleStep.VALIDATE) from None


def serialize_reaction(raw):
    return {
        'id': str(raw['_id']),
        'user_id': str(raw['user']),
        'post_id': str(raw['post']),
        'status': raw['status']
    }


class ReactionStore(object):
    """One reaction record per (user, post); NEUTRAL is the absence of a record."""

    def __init__(self, document=Reaction):
        self.document = document

    def get(self, user_id, post_id):
        reaction = self.document.objects(user=user_id, post=post_id).only('status').first()

        if reaction is None:
            return ReactionStatus.NEUTRAL

        return ReactionStatus(reaction.status)

    def set(self, user_id, post_id, status):
        status = ReactionStatus(status)
        reactions = self.document.objects(user=user_id, post=post_id)

        if status is ReactionStatus.NEUTRAL:
            reactions.delete()
        else:
            reactions.update_one(set__status=status.value, upsert=True)

    def count_by_status(self, post_id, status):
        return self.document.objects(post=post_id, status=ReactionStatus(status).value).count()

    def find_by_user(self, user_id, status):
        reactions = self.document.objects(user=user_id, status=ReactionStatus(status).value)
        return [serialize_reaction(raw) for raw in reactions.order_by('-id').as_pymongo()]

    def find_by_post(self, post_id, status):
        reactions = self.document.objects(post=post_id, status=ReactionStatus(status).value)
        return [serialize_reaction(raw) for raw in reactions.order_by('-id').as_pymongo()]


class ReactionCounter(object):

    def __init__(self, store):
        self.store = store

    def snapshot(self, post_id):
        return Counters(
            likes=self.store.count_by_status(post_id, ReactionStatus.LIKED),
            dislikes=self.store.count_by_status(post_id, ReactionStatus.DISLIKED)
        )


class PostCounterSink(object):
    """Writes like/dislike totals onto ``Post.stats``; other counters are left alone."""

    def __init__(self, document=Post):
        self.document = document

    def exists(self, post_id):
        return self.document.objects(id=post_id).only('id').first() is not None

    def update(self, post_id, counters):
        updated = self.document.objects(id=post_id).update_one(
            set__stats__likes=counters.likes,
            set__stats__dislikes=counters.dislikes
        )

        if not updated:
            raise NotFound(f'Post {post_id} not found')


class ReactionToggleService(object):
    """Read-decide-write transition of a user's reaction to a post.

    Counters are recomputed from the reaction records after each write instead
    of being incremented, so a failed or interleaved toggle is healed by the
    next one. A raised ``ReactionError`` leaves the state as of the last
    completed step; callers should re-query before retrying.
    """

    def __init__(self, store, counter, sink):
        self.store = store
        self.counter = counter
        self.sink = sink

    # toggle_reaction()
    def toggle_reaction(self, user_id, post_id, action):
        user_id = to_object_id(user_id, 'user id')
        post_id = to_object_id(post_id, 'post id')
        action = to_enum(ReactionAction, action, 'reaction')

        try:
            self._require_post(post_id)

            with failing_step(ToggleStep.READ_STATUS):
                current = self.store.get(user_id, post_id)

            with failing_step(ToggleStep.READ_COUNTERS):
                before = self.counter.snapshot(post_id)

            status = next_status(current, action)
            counters = self._commit(user_id, post_id, status)
        except ReactionError as err:
            logger.warning('Toggle %s by %s on %s failed: %s', action.value, user_id, post_id, err)
            raise

        logger.info(
            'Toggle %s by %s on %s: %s -> %s, likes %d -> %d, dislikes %d -> %d',
            action.value, user_id, post_id, current.value, status.value,
            before.likes, counters.likes, before.dislikes, counters.dislikes
        )

        return Toggled(status, counters)

    # set_reaction()
    def set_reaction(self, user_id, post_id, status):
        """Put the reaction in ``status`` whatever it was; repeating it is a no-op."""
        user_id = to_object_id(user_id, 'user id')
        post_id = to_object_id(post_id, 'post id')
        status = to_enum(ReactionStatus, status, 'reaction status')

        try:
            self._require_post(post_id)
            counters = self._commit(user_id, post_id, status)
        except ReactionError as err:
            logger.warning('Set %s by %s on %s failed: %s', status.value, user_id, post_id, err)
            raise

        logger.info('Set %s by %s on %s: likes %d, dislikes %d',
            status.value, user_id, post_id, counters.likes, counters.dislikes)

        return counters

    # reconcile()
    def reconcile(self, post_id):
        post_id = to_object_id(post_id, 'post id')

        with failing_step(ToggleStep.RECOUNT):
            counters = self.counter.snapshot(post_id)

        with failing_step(ToggleStep.PUSH_COUNTERS):
            self.sink.update(post_id, counters)

        logger.info('Reconciled %s: likes %d, dislikes %d', post_id, counters.likes, counters.dislikes)

        return counters

    # status()
    def status(self, user_id, post_id):
        user_id = to_object_id(user_id, 'user id')
        post_id = to_object_id(post_id, 'post id')

        with failing_step(ToggleStep.READ_STATUS):
            return self.store.get(user_id, post_id)

    # stats()
    def stats(self, post_id):
        post_id = to_object_id(post_id, 'post id')
        self._require_post(post_id)

        with failing_step(ToggleStep.READ_COUNTERS):
            return self.counter.snapshot(post_id)

    # posts_reacted_by()
    def posts_reacted_by(self, user_id, status):
        user_id = to_object_id(user_id, 'user id')
        status = to_enum(ReactionStatus, status, 'reaction status')

        with failing_step(ToggleStep.QUERY):
            return self.store.find_by_user(user_id, status)

    # users_reacting_to()
    def users_reacting_to(self, post_id, status):
        post_id = to_object_id(post_id, 'post id')
        status = to_enum(ReactionStatus, status, 'reaction status')

        with failing_step(ToggleStep.QUERY):
            return self.store.find_by_post(post_id, status)

    def _require_post(self, post_id):
        with failing_step(ToggleStep.CHECK_POST):
            if not self.sink.exists(post_id):
                raise NotFound(f'Post {post_id} not found')

    def _commit(self, user_id, post_id, status):
        with failing_step(ToggleStep.WRITE_STATUS):
            self.store.set(user_id, post_id, status)

        with failing_step(ToggleStep.RECOUNT):
            counters = self.counter.snapshot(post_id)

        with failing_step(ToggleStep.PUSH_COUNTERS):
            self.sink.update(post_id, counters)

        return counters
