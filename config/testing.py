from .config import Config

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DEFAULT_RULES = dict(Config.DEFAULT_RULES)
TRUST_CLIENT_CLOCK = True
