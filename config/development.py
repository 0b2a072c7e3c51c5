import os

from .config import Config

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

DEFAULT_RULES = dict(Config.DEFAULT_RULES)
TRUST_CLIENT_CLOCK = bool(int(os.getenv("TRUST_CLIENT_CLOCK", "1")))
