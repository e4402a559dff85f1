import os

os.environ.setdefault('SECRET_KEY', 'test-secret')
os.environ.setdefault('JWT_SECRET_KEY', 'test-jwt-secret')
os.environ.setdefault('MONGODB_HOST', 'mongodb://localhost/tuiter?tlsCAFile=')

import mongoengine
import mongomock
import pytest

from app import create_app
from config import TestingConfig
from models.post import Post
from models.user import User


class MockConfig(TestingConfig):
    MONGODB_SETTINGS = dict(TestingConfig.MONGODB_SETTINGS, mongo_client_class=mongomock.MongoClient)


@pytest.fixture
def config():
    return MockConfig


@pytest.fixture
def app(config):
    app = create_app(config)
    yield app
    mongoengine.disconnect()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def service(app):
    return app.extensions['reactions']


@pytest.fixture
def make_user(app):
    def make_user(username):
        return User(full_name=username.title(), username=username).save()
    return make_user


@pytest.fixture
def make_post(app, make_user):
    def make_post(author=None, text='hello'):
        author = author or make_user(f'author{Post.objects.count()}')
        return Post(author=author, text=text).save()
    return make_post
