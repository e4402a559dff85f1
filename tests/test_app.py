import logging

import mongoengine
from flask.logging import default_handler

from app import create_app
from models.post import Post


def test_create_app_leaves_root_logger_alone(config):
    root_handlers = list(logging.getLogger().handlers)

    app = create_app(config)
    mongoengine.disconnect()

    assert logging.getLogger().handlers == root_handlers
    assert app.logger.level == logging.INFO
    assert default_handler in logging.getLogger('services').handlers
    assert logging.getLogger('services.reactions').getEffectiveLevel() == logging.INFO


def test_post_date_defaults_to_aware_utc(app, make_user):
    post = Post(author=make_user('u1'), text='hello')

    assert post.date.tzinfo is not None
    assert post.date.utcoffset().total_seconds() == 0
