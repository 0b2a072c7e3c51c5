from .config import Config

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

DEFAULT_RULES = dict(Config.DEFAULT_RULES)
TRUST_CLIENT_CLOCK = Config.TRUST_CLIENT_CLOCK
