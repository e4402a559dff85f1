# config.py

import os
import certifi

class Config(object):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.environ['SECRET_KEY']
    MONGODB_SETTINGS = { 'host': f'{os.environ["MONGODB_HOST"]}{certifi.where()}' }
    JWT_SECRET_KEY = os.environ['JWT_SECRET_KEY']


class ProductionConfig(Config):
    DEBUG = False


class DevelopmentConfig(Config):
    DEVELOPMENT = True
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    MONGODB_SETTINGS = { 'db': 'tuiter_test', 'host': 'mongodb://localhost' }
